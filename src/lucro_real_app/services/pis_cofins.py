from __future__ import annotations

from typing import Dict

from loguru import logger

from ..models.common import LineItem
from ..models.config import TaxConfiguration
from ..models.results import ContributionResult, PISCOFINSResult
from .icms import taxable_share


def _contribution(
    config: TaxConfiguration,
    rate: float,
    opening_inventory_credit: float,
    other_credits: float,
) -> ContributionResult:
    factor = taxable_share(config.percent_monofasico)
    debit = LineItem.from_rate(config.gross_revenue * factor, rate)

    purchases_credit = LineItem.from_rate(config.internal_purchases + config.interstate_purchases, rate)
    buckets = {
        "energy": LineItem.from_rate(config.energy, rate),
        "rent": LineItem.from_rate(config.rent, rate),
        "leasing": LineItem.from_rate(config.leasing, rate),
        "freight": LineItem.from_rate(config.freight, rate),
        "depreciation": LineItem.from_rate(config.depreciation, rate),
        "fuel": LineItem.from_rate(config.fuel, rate),
        "transit_voucher": LineItem.from_rate(config.transit_voucher, rate),
    }
    expense_credits: Dict[str, LineItem] = {}
    for item in config.credit_eligible_expenses:
        credit = LineItem.from_rate(item.value, rate)
        if item.id in expense_credits:
            # Duplicate ids still earn their credit; merge into one row
            previous = expense_credits[item.id]
            credit = LineItem(base=previous.base + credit.base, rate=rate, value=previous.value + credit.value)
        expense_credits[item.id] = credit
    opening_inventory = LineItem.flat(opening_inventory_credit)
    other = LineItem.flat(other_credits)

    total_debits = debit.value
    total_credits = (
        purchases_credit.value
        + sum(row.value for row in buckets.values())
        + sum(row.value for row in expense_credits.values())
        + opening_inventory.value
        + other.value
    )
    balance = total_debits - total_credits

    return ContributionResult(
        debit=debit,
        purchases_credit=purchases_credit,
        expense_credits=expense_credits,
        opening_inventory_credit=opening_inventory,
        other_credits=other,
        total_debits=total_debits,
        total_credits=total_credits,
        amount_payable=max(0.0, balance),
        carryover_credit=max(0.0, -balance),
        **buckets,
    )


def calculate_pis_cofins(config: TaxConfiguration) -> PISCOFINSResult:
    pis = _contribution(
        config,
        config.pis_rate,
        config.pis_opening_inventory_credit,
        config.pis_other_credits,
    )
    cofins = _contribution(
        config,
        config.cofins_rate,
        config.cofins_opening_inventory_credit,
        config.cofins_other_credits,
    )
    logger.debug(
        "PIS payable={:.2f} COFINS payable={:.2f} ({} credit-eligible expenses)",
        pis.amount_payable,
        cofins.amount_payable,
        len(config.credit_eligible_expenses),
    )
    return PISCOFINSResult(
        pis=pis,
        cofins=cofins,
        eligible_expenses=config.credit_eligible_expenses,
        total_payable=pis.amount_payable + cofins.amount_payable,
    )
