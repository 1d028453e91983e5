from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel, to_snake


class Period(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"

    @property
    def months(self) -> int:
        return PERIOD_MONTHS[self]


PERIOD_MONTHS = {
    Period.MONTHLY: 1,
    Period.QUARTERLY: 3,
    Period.ANNUAL: 12,
}


class InterstateDestination(str, Enum):
    SOUTH_SOUTHEAST = "south_southeast"
    NORTH_NORTHEAST = "north_northeast"


class ExpenseClassification(str, Enum):
    COST = "cost"
    OPERATING_EXPENSE = "operating_expense"


class CreditEligibility(str, Enum):
    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_null_defaults(cls, data: Any) -> Any:
        """Treat an explicit ``None`` as absent for every field that has a non-null default."""
        if not isinstance(data, dict):
            return data
        defaulted = set()
        for name, field in cls.model_fields.items():
            if field.is_required() or (field.default is None and field.default_factory is None):
                continue
            defaulted.add(name)
            defaulted.add(field.alias)
        return {key: value for key, value in data.items() if not (value is None and key in defaulted)}


class LineItem(FrozenModel):
    base: float = 0.0
    rate: float = 0.0
    value: float = 0.0

    @classmethod
    def from_rate(cls, base: float, rate: float) -> "LineItem":
        return cls(base=base, rate=rate, value=base * rate / 100)

    @classmethod
    def flat(cls, amount: float) -> "LineItem":
        """Already-computed monetary credit; base mirrors the value, rate is informational."""
        return cls(base=amount, rate=0.0, value=amount)


class ExpenseItem(FrozenModel):
    id: str
    description: str = ""
    value: float = Field(0.0, ge=0)
    classification: ExpenseClassification
    credit_eligibility: CreditEligibility = CreditEligibility.INELIGIBLE
    category: Optional[str] = None

    @field_validator("classification", "credit_eligibility", mode="before")
    @classmethod
    def _snake_case_value(cls, value: Any) -> Any:
        # "operatingExpense" and "operating_expense" name the same member
        if isinstance(value, str):
            return to_snake(value)
        return value

    @property
    def is_operating_expense(self) -> bool:
        return self.classification == ExpenseClassification.OPERATING_EXPENSE

    @property
    def is_credit_eligible(self) -> bool:
        return self.credit_eligibility == CreditEligibility.ELIGIBLE
