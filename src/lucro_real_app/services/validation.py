from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel

from ..models.config import TaxConfiguration

PERCENT_FIELDS = (
    "percent_internal_sales",
    "percent_interstate_sales",
    "percent_final_consumer",
    "percent_substituicao_tributaria",
    "percent_monofasico",
)

RATE_FIELDS = (
    "icms_internal",
    "icms_interstate_south",
    "icms_interstate_north",
    "difal",
    "fcp",
    "pis_rate",
    "cofins_rate",
    "irpj_base_rate",
    "irpj_surtax_rate",
    "csll_rate",
    "iss_rate",
)

AMOUNT_FIELDS = (
    "gross_revenue",
    "internal_purchases",
    "interstate_purchases",
    "cost_of_goods_sold",
    "energy",
    "rent",
    "leasing",
    "freight",
    "depreciation",
    "fuel",
    "transit_voucher",
    "additions",
    "exclusions",
    "icms_opening_inventory_credit",
    "icms_fixed_assets_credit",
    "icms_industrial_energy_credit",
    "icms_substitution_entry_credit",
    "icms_other_credits",
    "pis_opening_inventory_credit",
    "cofins_opening_inventory_credit",
    "pis_other_credits",
    "cofins_other_credits",
)


class IssueSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class ConfigurationIssue(BaseModel):
    field: str
    message: str
    severity: IssueSeverity = IssueSeverity.ERROR


def validate_configuration(config: TaxConfiguration) -> List[ConfigurationIssue]:
    """Report inputs the engines will compute anyway but that are likely wrong.

    Nothing here blocks a calculation; callers decide whether to reject.
    """
    issues: List[ConfigurationIssue] = []
    for name in RATE_FIELDS + AMOUNT_FIELDS:
        if getattr(config, name) < 0:
            issues.append(ConfigurationIssue(field=name, message="Value cannot be negative"))
    for name in PERCENT_FIELDS:
        value = getattr(config, name)
        if value < 0 or value > 100:
            issues.append(ConfigurationIssue(field=name, message="Percentage must be between 0 and 100"))
    if config.percent_internal_sales + config.percent_interstate_sales > 100:
        issues.append(
            ConfigurationIssue(
                field="percent_interstate_sales",
                message="Internal and interstate sales together exceed 100% of revenue",
            )
        )
    if config.gross_revenue == 0:
        issues.append(
            ConfigurationIssue(field="gross_revenue", message="Gross revenue is zero", severity=IssueSeverity.WARNING)
        )
    if config.irpj_monthly_threshold is not None and config.irpj_monthly_threshold < 0:
        issues.append(ConfigurationIssue(field="irpj_monthly_threshold", message="Value cannot be negative"))
    return issues
