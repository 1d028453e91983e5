from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, HTTPException
from loguru import logger
from pydantic import ValidationError

from .logging_config import configure_logging
from .schemas import (
    CalculationRequest,
    CalculationResponse,
    MonthlyBreakdownRequest,
    MonthlyBreakdownResponse,
)
from .models.config import TaxConfiguration
from .models.results import MonthlyBreakdownTotals
from .services.calculator import TaxCalculator
from .services.normalization import normalize_configuration
from .services.validation import validate_configuration
from .settings import get_settings


configure_logging()
settings = get_settings()

app = FastAPI(title=settings.app_name, version="0.1.0")

calculator = TaxCalculator()


def _load_configuration(payload: CalculationRequest) -> TaxConfiguration:
    try:
        config = normalize_configuration(payload.configuration)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return config


@app.post("/calculate", response_model=CalculationResponse)
def calculate(payload: CalculationRequest) -> CalculationResponse:
    config = _load_configuration(payload)
    issues = validate_configuration(config)
    if issues:
        logger.warning("Configuration has {} issue(s): {}", len(issues), ", ".join(i.field for i in issues))
    result = calculator.run(config)
    return CalculationResponse(result=result, issues=issues)


@app.post("/calculate/monthly", response_model=MonthlyBreakdownResponse)
def calculate_monthly(payload: MonthlyBreakdownRequest) -> MonthlyBreakdownResponse:
    config = _load_configuration(payload)
    issues = validate_configuration(config)
    try:
        months = calculator.monthly_breakdown(config, payload.start_date)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return MonthlyBreakdownResponse(months=months, totals=MonthlyBreakdownTotals.from_months(months), issues=issues)


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}
