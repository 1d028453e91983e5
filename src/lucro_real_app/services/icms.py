from __future__ import annotations

from loguru import logger

from ..models.common import LineItem
from ..models.config import TaxConfiguration
from ..models.results import ICMSResult


def taxable_share(percent_exempt: float) -> float:
    """Fraction of revenue still subject to a tax after a regime exemption."""
    return (100 - percent_exempt) / 100


def calculate_icms(config: TaxConfiguration) -> ICMSResult:
    factor = taxable_share(config.percent_substituicao_tributaria)
    revenue = config.gross_revenue

    internal_base = revenue * config.percent_internal_sales / 100 * factor
    interstate_base = revenue * config.percent_interstate_sales / 100 * factor
    final_consumer_base = revenue * config.percent_final_consumer / 100 * factor

    internal_sales = LineItem.from_rate(internal_base, config.icms_internal)
    interstate_sales = LineItem.from_rate(interstate_base, config.interstate_rate)
    difal = LineItem.from_rate(final_consumer_base, config.difal)
    fcp = LineItem.from_rate(final_consumer_base, config.fcp)

    internal_purchases = LineItem.from_rate(config.internal_purchases, config.icms_internal)
    interstate_purchases = LineItem.from_rate(config.interstate_purchases, config.interstate_rate)
    opening_inventory = LineItem.flat(config.icms_opening_inventory_credit)
    fixed_assets = LineItem.flat(config.icms_fixed_assets_credit)
    industrial_energy = LineItem.flat(config.icms_industrial_energy_credit)
    substitution_entry_credit = LineItem.flat(config.icms_substitution_entry_credit)
    other_credits = LineItem.flat(config.icms_other_credits)

    total_debits = internal_sales.value + interstate_sales.value + difal.value + fcp.value
    total_credits = (
        internal_purchases.value
        + interstate_purchases.value
        + opening_inventory.value
        + fixed_assets.value
        + industrial_energy.value
        + substitution_entry_credit.value
        + other_credits.value
    )
    balance = total_debits - total_credits

    logger.debug("ICMS debits={:.2f} credits={:.2f} (ST factor {:.4f})", total_debits, total_credits, factor)

    return ICMSResult(
        internal_sales=internal_sales,
        interstate_sales=interstate_sales,
        difal=difal,
        fcp=fcp,
        internal_purchases=internal_purchases,
        interstate_purchases=interstate_purchases,
        opening_inventory=opening_inventory,
        fixed_assets=fixed_assets,
        industrial_energy=industrial_energy,
        substitution_entry_credit=substitution_entry_credit,
        other_credits=other_credits,
        total_debits=total_debits,
        total_credits=total_credits,
        amount_payable=max(0.0, balance),
        # Reported only; never fed into another period
        carryover_credit=max(0.0, -balance),
    )
