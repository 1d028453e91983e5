from __future__ import annotations

from datetime import date
from typing import Dict, List, Tuple

from .common import ExpenseItem, FrozenModel, LineItem


class ICMSResult(FrozenModel):
    # Debits
    internal_sales: LineItem
    interstate_sales: LineItem
    difal: LineItem
    fcp: LineItem

    # Credits
    internal_purchases: LineItem
    interstate_purchases: LineItem
    opening_inventory: LineItem
    fixed_assets: LineItem
    industrial_energy: LineItem
    substitution_entry_credit: LineItem
    other_credits: LineItem

    total_debits: float
    total_credits: float
    amount_payable: float
    carryover_credit: float

    def debit_rows(self) -> Dict[str, LineItem]:
        return {
            "internal_sales": self.internal_sales,
            "interstate_sales": self.interstate_sales,
            "difal": self.difal,
            "fcp": self.fcp,
        }

    def credit_rows(self) -> Dict[str, LineItem]:
        return {
            "internal_purchases": self.internal_purchases,
            "interstate_purchases": self.interstate_purchases,
            "opening_inventory": self.opening_inventory,
            "fixed_assets": self.fixed_assets,
            "industrial_energy": self.industrial_energy,
            "substitution_entry_credit": self.substitution_entry_credit,
            "other_credits": self.other_credits,
        }


class ContributionResult(FrozenModel):
    """Debit/credit ledger for one contribution (PIS or COFINS)."""

    debit: LineItem
    purchases_credit: LineItem
    energy: LineItem
    rent: LineItem
    leasing: LineItem
    freight: LineItem
    depreciation: LineItem
    fuel: LineItem
    transit_voucher: LineItem
    expense_credits: Dict[str, LineItem]
    opening_inventory_credit: LineItem
    other_credits: LineItem

    total_debits: float
    total_credits: float
    amount_payable: float
    carryover_credit: float

    def bucket_rows(self) -> Dict[str, LineItem]:
        return {
            "energy": self.energy,
            "rent": self.rent,
            "leasing": self.leasing,
            "freight": self.freight,
            "depreciation": self.depreciation,
            "fuel": self.fuel,
            "transit_voucher": self.transit_voucher,
        }


class PISCOFINSResult(FrozenModel):
    pis: ContributionResult
    cofins: ContributionResult
    eligible_expenses: Tuple[ExpenseItem, ...]
    total_payable: float


class IRPJCSLLResult(FrozenModel):
    gross_revenue: float
    iss_payable: float
    total_deductions: float
    net_revenue: float
    cost_of_goods_sold: float
    gross_profit: float
    operating_expenses_total: float
    profit_before_tax: float
    additions: float
    exclusions: float
    taxable_profit: float
    threshold: float
    irpj_base: LineItem
    irpj_surtax: LineItem
    total_irpj: float
    csll: LineItem
    total_income_tax: float


class DREDeductions(FrozenModel):
    icms: float
    pis: float
    cofins: float
    iss: float
    total: float


class DREIncomeTaxes(FrozenModel):
    irpj: float
    csll: float
    total: float


class DREResult(FrozenModel):
    gross_revenue: float
    deductions: DREDeductions
    net_revenue: float
    cogs: float
    gross_profit: float
    operating_expenses: float
    profit_before_tax: float
    income_taxes: DREIncomeTaxes
    net_profit: float
    gross_margin: float
    net_margin: float


class TaxSummary(FrozenModel):
    icms: float
    pis_cofins: float
    irpj_csll: float
    iss: float
    total_taxes: float
    tax_burden: float
    credits_total: float


class CalculationResult(FrozenModel):
    icms: ICMSResult
    pis_cofins: PISCOFINSResult
    irpj_csll: IRPJCSLLResult
    dre: DREResult
    summary: TaxSummary


class MonthlyBreakdown(FrozenModel):
    period_start: date
    month: int
    result: CalculationResult


class MonthlyBreakdownTotals(FrozenModel):
    gross_revenue: float
    total_taxes: float
    net_profit: float

    @classmethod
    def from_months(cls, months: List[MonthlyBreakdown]) -> "MonthlyBreakdownTotals":
        return cls(
            gross_revenue=sum(m.result.dre.gross_revenue for m in months),
            total_taxes=sum(m.result.summary.total_taxes for m in months),
            net_profit=sum(m.result.dre.net_profit for m in months),
        )
