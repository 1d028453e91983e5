from __future__ import annotations

import math

from loguru import logger

from ..models.config import TaxConfiguration
from ..models.results import (
    DREDeductions,
    DREIncomeTaxes,
    DREResult,
    ICMSResult,
    IRPJCSLLResult,
    PISCOFINSResult,
    TaxSummary,
)


def percent_of(amount: float, total: float) -> float:
    return (amount / total) * 100 if total else 0.0


def build_dre(
    config: TaxConfiguration,
    icms: ICMSResult,
    pis_cofins: PISCOFINSResult,
    irpj_csll: IRPJCSLLResult,
) -> DREResult:
    gross_revenue = config.gross_revenue
    deductions = DREDeductions(
        icms=icms.amount_payable,
        pis=pis_cofins.pis.amount_payable,
        cofins=pis_cofins.cofins.amount_payable,
        iss=irpj_csll.iss_payable,
        total=icms.amount_payable + pis_cofins.total_payable + irpj_csll.iss_payable,
    )
    if not math.isclose(deductions.total, irpj_csll.total_deductions, rel_tol=1e-9, abs_tol=1e-6):
        logger.error(
            "DRE deductions {:.2f} differ from IRPJ/CSLL deductions {:.2f}; engines were fed different inputs",
            deductions.total,
            irpj_csll.total_deductions,
        )

    net_revenue = gross_revenue - deductions.total
    cogs = config.cost_of_goods_sold
    gross_profit = net_revenue - cogs
    operating_expenses = config.operating_expenses_total
    profit_before_tax = gross_profit - operating_expenses
    income_taxes = DREIncomeTaxes(
        irpj=irpj_csll.total_irpj,
        csll=irpj_csll.csll.value,
        total=irpj_csll.total_income_tax,
    )
    net_profit = profit_before_tax - income_taxes.total

    return DREResult(
        gross_revenue=gross_revenue,
        deductions=deductions,
        net_revenue=net_revenue,
        cogs=cogs,
        gross_profit=gross_profit,
        operating_expenses=operating_expenses,
        profit_before_tax=profit_before_tax,
        income_taxes=income_taxes,
        net_profit=net_profit,
        gross_margin=percent_of(gross_profit, gross_revenue),
        net_margin=percent_of(net_profit, gross_revenue),
    )


def build_tax_summary(
    config: TaxConfiguration,
    icms: ICMSResult,
    pis_cofins: PISCOFINSResult,
    irpj_csll: IRPJCSLLResult,
) -> TaxSummary:
    total_taxes = (
        icms.amount_payable
        + pis_cofins.total_payable
        + irpj_csll.total_income_tax
        + irpj_csll.iss_payable
    )
    # ICMS credits count alongside PIS/COFINS credits
    credits_total = icms.total_credits + pis_cofins.pis.total_credits + pis_cofins.cofins.total_credits
    return TaxSummary(
        icms=icms.amount_payable,
        pis_cofins=pis_cofins.total_payable,
        irpj_csll=irpj_csll.total_income_tax,
        iss=irpj_csll.iss_payable,
        total_taxes=total_taxes,
        tax_burden=percent_of(total_taxes, config.gross_revenue),
        credits_total=credits_total,
    )
