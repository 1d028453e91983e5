from __future__ import annotations

from typing import Any, Optional, Tuple

from loguru import logger
from pydantic import Field, ValidationError, field_validator

from .common import ExpenseItem, FrozenModel, InterstateDestination, Period


class TaxConfiguration(FrozenModel):
    """Immutable input shared by every engine.

    Rates and shares are percentages (18 means 18%). Monetary fields are in BRL
    for the chosen ``period``. Every number defaults to zero and ``expenses`` to
    an empty tuple, so a partial payload always builds. Instances are frozen and
    hash by value, which is what the calculator caches on.
    """

    # Rates
    icms_internal: float = 0.0
    icms_interstate_south: float = 0.0
    icms_interstate_north: float = 0.0
    interstate_destination: InterstateDestination = InterstateDestination.SOUTH_SOUTHEAST
    difal: float = 0.0
    fcp: float = 0.0
    pis_rate: float = 0.0
    cofins_rate: float = 0.0
    irpj_base_rate: float = 0.0
    irpj_surtax_rate: float = 0.0
    csll_rate: float = 0.0
    iss_rate: float = 0.0

    # Revenue composition
    gross_revenue: float = 0.0
    percent_internal_sales: float = 0.0
    percent_interstate_sales: float = 0.0
    percent_final_consumer: float = 0.0

    # Share of revenue exempted from ICMS / PIS-COFINS debits
    percent_substituicao_tributaria: float = 0.0
    percent_monofasico: float = 0.0

    # Purchases and cost
    internal_purchases: float = 0.0
    interstate_purchases: float = 0.0
    cost_of_goods_sold: float = 0.0

    # PIS/COFINS credit-eligible expense buckets
    energy: float = 0.0
    rent: float = 0.0
    leasing: float = 0.0
    freight: float = 0.0
    depreciation: float = 0.0
    fuel: float = 0.0
    transit_voucher: float = 0.0

    # ICMS credits already expressed in BRL
    icms_opening_inventory_credit: float = 0.0
    icms_fixed_assets_credit: float = 0.0
    icms_industrial_energy_credit: float = 0.0
    icms_substitution_entry_credit: float = 0.0
    icms_other_credits: float = 0.0

    # PIS/COFINS credits already expressed in BRL
    pis_opening_inventory_credit: float = 0.0
    cofins_opening_inventory_credit: float = 0.0
    pis_other_credits: float = 0.0
    cofins_other_credits: float = 0.0

    # Lucro real adjustments
    additions: float = 0.0
    exclusions: float = 0.0

    period: Period = Period.MONTHLY
    irpj_monthly_threshold: Optional[float] = Field(
        default=None,
        description="Overrides Settings.irpj_monthly_threshold when set",
    )

    expenses: Tuple[ExpenseItem, ...] = ()

    @field_validator("expenses", mode="before")
    @classmethod
    def _skip_malformed_expenses(cls, value: Any) -> Tuple[Any, ...]:
        if value is None:
            return ()
        kept = []
        for position, raw in enumerate(value):
            if isinstance(raw, ExpenseItem):
                kept.append(raw)
                continue
            try:
                kept.append(ExpenseItem.model_validate(raw))
            except ValidationError as exc:
                logger.warning(
                    "Ignoring malformed expense at position {}: {}",
                    position,
                    "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors()),
                )
        return tuple(kept)

    @property
    def interstate_rate(self) -> float:
        if self.interstate_destination == InterstateDestination.NORTH_NORTHEAST:
            return self.icms_interstate_north
        return self.icms_interstate_south

    @property
    def operating_expenses_total(self) -> float:
        return sum(item.value for item in self.expenses if item.is_operating_expense)

    @property
    def credit_eligible_expenses(self) -> Tuple[ExpenseItem, ...]:
        return tuple(item for item in self.expenses if item.is_credit_eligible)
