from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from loguru import logger

from ..models.common import Period
from ..models.config import TaxConfiguration
from ..models.results import (
    CalculationResult,
    DREResult,
    ICMSResult,
    IRPJCSLLResult,
    MonthlyBreakdown,
    PISCOFINSResult,
)
from ..settings import get_settings
from .dre import build_dre, build_tax_summary
from .icms import calculate_icms
from .irpj_csll import calculate_irpj_csll
from .pis_cofins import calculate_pis_cofins

# Amounts that scale with the length of the period; rates and shares do not
MONETARY_FIELDS = (
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
    "icms_opening_inventory_credit",
    "icms_fixed_assets_credit",
    "icms_industrial_energy_credit",
    "icms_substitution_entry_credit",
    "icms_other_credits",
    "pis_opening_inventory_credit",
    "cofins_opening_inventory_credit",
    "pis_other_credits",
    "cofins_other_credits",
    "additions",
    "exclusions",
)


class TaxCalculator:
    """Evaluates the engines in dependency order.

    ICMS and PIS/COFINS are leaves; IRPJ/CSLL consumes their payables; the DRE and
    the summary compose all three. Each stage is memoized on the configuration
    value (frozen models hash structurally), so rebuilding an equal configuration
    reuses earlier results.
    """

    def __init__(self, cache_size: Optional[int] = None) -> None:
        size = cache_size if cache_size is not None else get_settings().cache_size
        self._icms = lru_cache(maxsize=size)(calculate_icms)
        self._pis_cofins = lru_cache(maxsize=size)(calculate_pis_cofins)
        self._irpj_csll = lru_cache(maxsize=size)(calculate_irpj_csll)
        self._run = lru_cache(maxsize=size)(self._evaluate)

    def icms(self, config: TaxConfiguration) -> ICMSResult:
        return self._icms(config)

    def pis_cofins(self, config: TaxConfiguration) -> PISCOFINSResult:
        return self._pis_cofins(config)

    def irpj_csll(self, config: TaxConfiguration) -> IRPJCSLLResult:
        pis_cofins = self.pis_cofins(config)
        return self._irpj_csll(
            config,
            self.icms(config).amount_payable,
            pis_cofins.pis.amount_payable,
            pis_cofins.cofins.amount_payable,
        )

    def dre(self, config: TaxConfiguration) -> DREResult:
        return self.run(config).dre

    def run(self, config: TaxConfiguration) -> CalculationResult:
        return self._run(config)

    def _evaluate(self, config: TaxConfiguration) -> CalculationResult:
        icms = self.icms(config)
        pis_cofins = self.pis_cofins(config)
        irpj_csll = self.irpj_csll(config)
        dre = build_dre(config, icms, pis_cofins, irpj_csll)
        summary = build_tax_summary(config, icms, pis_cofins, irpj_csll)
        logger.info(
            "Calculated {} scenario: revenue={:.2f} taxes={:.2f} net profit={:.2f}",
            config.period.value,
            config.gross_revenue,
            summary.total_taxes,
            dre.net_profit,
        )
        return CalculationResult(icms=icms, pis_cofins=pis_cofins, irpj_csll=irpj_csll, dre=dre, summary=summary)

    def monthly_breakdown(self, config: TaxConfiguration, start_date: date) -> List[MonthlyBreakdown]:
        """Spread an annual configuration evenly over twelve independent months.

        Each month is computed on its own; credits left over in one month are not
        carried into the next.
        """
        if config.period != Period.ANNUAL:
            raise ValueError(f"Monthly breakdown requires an annual configuration, got {config.period.value}")
        monthly = monthly_configuration(config)
        result = self.run(monthly)
        return [
            MonthlyBreakdown(period_start=start_date + relativedelta(months=index), month=index + 1, result=result)
            for index in range(12)
        ]

    def cache_info(self) -> dict:
        return {
            "icms": self._icms.cache_info(),
            "pis_cofins": self._pis_cofins.cache_info(),
            "irpj_csll": self._irpj_csll.cache_info(),
            "run": self._run.cache_info(),
        }

    def clear_cache(self) -> None:
        for cached in (self._icms, self._pis_cofins, self._irpj_csll, self._run):
            cached.cache_clear()


def monthly_configuration(config: TaxConfiguration) -> TaxConfiguration:
    months = config.period.months
    update = {name: getattr(config, name) / months for name in MONETARY_FIELDS}
    update["expenses"] = tuple(item.model_copy(update={"value": item.value / months}) for item in config.expenses)
    update["period"] = Period.MONTHLY
    return config.model_copy(update=update)
