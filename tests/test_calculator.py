from __future__ import annotations

from datetime import date

import pytest

from lucro_real_app.models.common import Period
from lucro_real_app.models.config import TaxConfiguration
from lucro_real_app.sample_data import build_sample_configuration
from lucro_real_app.services.calculator import TaxCalculator, monthly_configuration


def test_sample_configuration_generates_results():
    config = build_sample_configuration()
    calculator = TaxCalculator()
    result = calculator.run(config)

    assert result.icms.internal_sales.value == pytest.approx(126000)
    assert result.dre.gross_revenue == 1000000
    assert result.dre.deductions.total == pytest.approx(
        result.icms.amount_payable + result.pis_cofins.total_payable + result.irpj_csll.iss_payable
    )
    assert result.irpj_csll.threshold == 240000
    assert result.dre.net_profit < result.dre.profit_before_tax


def test_income_tax_engine_receives_leaf_payables():
    config = build_sample_configuration()
    calculator = TaxCalculator()
    result = calculator.run(config)

    expected = (
        result.icms.amount_payable
        + result.pis_cofins.pis.amount_payable
        + result.pis_cofins.cofins.amount_payable
        + result.irpj_csll.iss_payable
    )
    assert result.irpj_csll.total_deductions == pytest.approx(expected)
    assert calculator.dre(config) == result.dre


def test_equal_configurations_share_cached_results():
    calculator = TaxCalculator(cache_size=8)
    first = calculator.run(build_sample_configuration())
    second = calculator.run(build_sample_configuration())

    assert second is first
    assert calculator.cache_info()["run"].hits == 1
    assert calculator.cache_info()["icms"].misses == 1


def test_changed_configuration_is_recomputed():
    calculator = TaxCalculator(cache_size=8)
    config = build_sample_configuration()
    first = calculator.run(config)
    second = calculator.run(config.model_copy(update={"gross_revenue": 2000000}))

    assert second is not first
    assert second.icms.internal_sales.value == pytest.approx(252000)


def test_clear_cache_resets_statistics():
    calculator = TaxCalculator(cache_size=8)
    calculator.run(build_sample_configuration())
    calculator.clear_cache()

    assert calculator.cache_info()["run"].currsize == 0


def test_monthly_configuration_scales_amounts_not_rates():
    config = build_sample_configuration()
    monthly = monthly_configuration(config)

    assert monthly.period == Period.MONTHLY
    assert monthly.gross_revenue == pytest.approx(1000000 / 12)
    assert monthly.cost_of_goods_sold == pytest.approx(400000 / 12)
    assert monthly.icms_internal == config.icms_internal
    assert monthly.percent_internal_sales == config.percent_internal_sales
    assert [item.value for item in monthly.expenses] == pytest.approx([item.value / 12 for item in config.expenses])


def test_monthly_breakdown_labels_twelve_months():
    calculator = TaxCalculator()
    months = calculator.monthly_breakdown(build_sample_configuration(), date(2024, 1, 31))

    assert len(months) == 12
    assert months[0].month == 1
    assert months[0].period_start == date(2024, 1, 31)
    assert months[1].period_start == date(2024, 2, 29)
    assert months[-1].period_start == date(2024, 12, 31)
    assert sum(m.result.dre.gross_revenue for m in months) == pytest.approx(1000000)
    assert months[0].result.irpj_csll.threshold == 20000


def test_monthly_breakdown_requires_annual_configuration():
    calculator = TaxCalculator()

    with pytest.raises(ValueError):
        calculator.monthly_breakdown(TaxConfiguration(period=Period.QUARTERLY), date(2024, 1, 1))
