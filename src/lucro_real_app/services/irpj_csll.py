from __future__ import annotations

from loguru import logger

from ..models.common import LineItem
from ..models.config import TaxConfiguration
from ..models.results import IRPJCSLLResult
from ..settings import get_settings


def monthly_threshold(config: TaxConfiguration) -> float:
    if config.irpj_monthly_threshold is not None:
        return config.irpj_monthly_threshold
    return get_settings().irpj_monthly_threshold


def surtax_threshold(config: TaxConfiguration) -> float:
    """IRPJ surtax exemption for the configured period (monthly limit x 1, 3 or 12)."""
    return monthly_threshold(config) * config.period.months


def calculate_irpj_csll(
    config: TaxConfiguration,
    icms_payable: float,
    pis_payable: float,
    cofins_payable: float,
) -> IRPJCSLLResult:
    """Lucro real chain: revenue deductions, gross profit, taxable profit, brackets.

    A negative taxable profit is not floored, so a loss yields negative IRPJ base
    and CSLL rows. Only the surtax base is clamped at zero.
    """
    revenue = config.gross_revenue
    iss_payable = revenue * config.iss_rate / 100
    total_deductions = icms_payable + pis_payable + cofins_payable + iss_payable
    net_revenue = revenue - total_deductions
    gross_profit = net_revenue - config.cost_of_goods_sold
    operating_expenses_total = config.operating_expenses_total
    profit_before_tax = gross_profit - operating_expenses_total
    taxable_profit = profit_before_tax + config.additions - config.exclusions

    irpj_base = LineItem.from_rate(taxable_profit, config.irpj_base_rate)
    threshold = surtax_threshold(config)
    irpj_surtax = LineItem.from_rate(max(0.0, taxable_profit - threshold), config.irpj_surtax_rate)
    total_irpj = irpj_base.value + irpj_surtax.value
    csll = LineItem.from_rate(taxable_profit, config.csll_rate)

    if taxable_profit < 0:
        logger.info("Taxable profit is negative ({:.2f}); IRPJ/CSLL carry negative values", taxable_profit)
    logger.debug(
        "Lucro real={:.2f} threshold={:.2f} IRPJ={:.2f} CSLL={:.2f}",
        taxable_profit,
        threshold,
        total_irpj,
        csll.value,
    )

    return IRPJCSLLResult(
        gross_revenue=revenue,
        iss_payable=iss_payable,
        total_deductions=total_deductions,
        net_revenue=net_revenue,
        cost_of_goods_sold=config.cost_of_goods_sold,
        gross_profit=gross_profit,
        operating_expenses_total=operating_expenses_total,
        profit_before_tax=profit_before_tax,
        additions=config.additions,
        exclusions=config.exclusions,
        taxable_profit=taxable_profit,
        threshold=threshold,
        irpj_base=irpj_base,
        irpj_surtax=irpj_surtax,
        total_irpj=total_irpj,
        csll=csll,
        total_income_tax=total_irpj + csll.value,
    )
