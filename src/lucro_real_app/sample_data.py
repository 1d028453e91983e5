from __future__ import annotations

from .models.common import CreditEligibility, ExpenseClassification, ExpenseItem, Period
from .models.config import TaxConfiguration


def build_sample_configuration() -> TaxConfiguration:
    expenses = (
        ExpenseItem(
            id="energia",
            description="Energia elétrica",
            value=24000,
            classification=ExpenseClassification.OPERATING_EXPENSE,
            credit_eligibility=CreditEligibility.ELIGIBLE,
            category="Energia",
        ),
        ExpenseItem(
            id="aluguel",
            description="Aluguel do galpão",
            value=60000,
            classification=ExpenseClassification.OPERATING_EXPENSE,
            credit_eligibility=CreditEligibility.ELIGIBLE,
            category="Aluguel",
        ),
        ExpenseItem(
            id="salarios",
            description="Salários administrativos",
            value=120000,
            classification=ExpenseClassification.OPERATING_EXPENSE,
            credit_eligibility=CreditEligibility.INELIGIBLE,
            category="Salários",
        ),
        ExpenseItem(
            id="frete-compras",
            description="Frete sobre compras",
            value=15000,
            classification=ExpenseClassification.COST,
            credit_eligibility=CreditEligibility.ELIGIBLE,
            category="Frete",
        ),
    )

    return TaxConfiguration(
        icms_internal=18,
        icms_interstate_south=12,
        icms_interstate_north=7,
        difal=6,
        fcp=2,
        pis_rate=1.65,
        cofins_rate=7.6,
        irpj_base_rate=15,
        irpj_surtax_rate=10,
        csll_rate=9,
        iss_rate=5,
        gross_revenue=1000000,
        percent_internal_sales=70,
        percent_interstate_sales=20,
        percent_final_consumer=10,
        internal_purchases=300000,
        interstate_purchases=100000,
        cost_of_goods_sold=400000,
        period=Period.ANNUAL,
        expenses=expenses,
    )
