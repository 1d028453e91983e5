from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .models.results import CalculationResult, MonthlyBreakdown, MonthlyBreakdownTotals
from .services.validation import ConfigurationIssue


class CalculationRequest(BaseModel):
    configuration: Dict[str, Any] = Field(
        default_factory=dict,
        description="Configuration payload; snake_case, camelCase or legacy field names",
    )


class MonthlyBreakdownRequest(CalculationRequest):
    start_date: date = Field(..., description="First month of the annual configuration")


class CalculationResponse(BaseModel):
    result: CalculationResult
    issues: List[ConfigurationIssue] = Field(default_factory=list)


class MonthlyBreakdownResponse(BaseModel):
    months: List[MonthlyBreakdown]
    totals: MonthlyBreakdownTotals
    issues: List[ConfigurationIssue] = Field(default_factory=list)
