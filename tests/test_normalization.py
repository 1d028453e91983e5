from __future__ import annotations

import pytest

from lucro_real_app.models.common import CreditEligibility, ExpenseClassification, InterstateDestination, Period
from lucro_real_app.models.config import TaxConfiguration
from lucro_real_app.services.icms import calculate_icms
from lucro_real_app.services.normalization import normalize_configuration
from lucro_real_app.services.pis_cofins import calculate_pis_cofins
from lucro_real_app.services.validation import IssueSeverity, validate_configuration


def test_missing_fields_default_to_zero():
    config = normalize_configuration({})

    assert config.gross_revenue == 0
    assert config.pis_rate == 0
    assert config.expenses == ()
    assert config.period == Period.MONTHLY


def test_null_numbers_and_expenses_become_defaults():
    config = normalize_configuration({"grossRevenue": None, "icms_internal": None, "expenses": None})

    assert config.gross_revenue == 0
    assert config.icms_internal == 0
    assert config.expenses == ()


def test_camel_case_payload():
    config = normalize_configuration(
        {
            "grossRevenue": 1000,
            "percentInternalSales": 100,
            "icmsInternal": 18,
            "percentSubstituicaoTributaria": 50,
            "period": "quarterly",
        }
    )

    assert config.period == Period.QUARTERLY
    assert calculate_icms(config).internal_sales.value == pytest.approx(90)


def test_legacy_scenario_payload():
    config = normalize_configuration(
        {
            "receitaBruta": 100000,
            "pisAliq": 1.65,
            "cofinsAliq": 7.6,
            "percentualMonofasico": 50,
            "limiteIrpj": 25000,
            "despesasDinamicas": [
                {
                    "id": "1",
                    "descricao": "Energia",
                    "valor": 1000,
                    "tipo": "despesa",
                    "credito": "com-credito",
                    "categoria": "Energia",
                },
                {"id": "2", "descricao": "Salários", "valor": 3000, "tipo": "custo", "credito": "sem-credito"},
            ],
        }
    )

    assert config.gross_revenue == 100000
    assert config.irpj_monthly_threshold == 25000
    assert [item.classification for item in config.expenses] == [
        ExpenseClassification.OPERATING_EXPENSE,
        ExpenseClassification.COST,
    ]
    assert config.expenses[0].credit_eligibility == CreditEligibility.ELIGIBLE
    assert config.expenses[0].category == "Energia"

    result = calculate_pis_cofins(config)
    assert result.pis.debit.value == pytest.approx(825)
    assert result.pis.expense_credits["1"].value == pytest.approx(16.5)
    assert "2" not in result.pis.expense_credits


def test_malformed_expenses_are_dropped():
    config = TaxConfiguration(
        expenses=[
            {"id": "ok", "value": 10, "classification": "operating_expense"},
            {"description": "no id", "value": 5, "classification": "operating_expense"},
            {"id": "no-class", "value": 5},
            {"id": "negative", "value": -5, "classification": "cost"},
            "not an expense",
        ]
    )

    assert [item.id for item in config.expenses] == ["ok"]
    assert config.operating_expenses_total == 10


def test_non_list_expenses_are_ignored():
    config = normalize_configuration({"grossRevenue": 10, "expenses": "broken"})

    assert config.expenses == ()
    assert config.gross_revenue == 10


def test_configurations_compare_by_value():
    payload = {"grossRevenue": 500, "expenses": [{"id": "a", "value": 1, "classification": "cost"}]}

    first = normalize_configuration(payload)
    second = normalize_configuration(dict(payload))

    assert first == second
    assert hash(first) == hash(second)


def test_validation_reports_without_raising():
    config = TaxConfiguration(
        gross_revenue=1000,
        percent_internal_sales=80,
        percent_interstate_sales=30,
        percent_monofasico=120,
        pis_rate=-1,
    )
    issues = {issue.field: issue for issue in validate_configuration(config)}

    assert "percent_interstate_sales" in issues
    assert "percent_monofasico" in issues
    assert "pis_rate" in issues
    assert "gross_revenue" not in issues


def test_validation_warns_on_zero_revenue():
    issues = validate_configuration(TaxConfiguration())

    assert len(issues) == 1
    assert issues[0].field == "gross_revenue"
    assert issues[0].severity == IssueSeverity.WARNING


def test_camel_case_expense_values():
    config = normalize_configuration(
        {
            "pisRate": 1.65,
            "expenses": [
                {"id": "a", "value": 100, "classification": "operatingExpense", "creditEligibility": "eligible"},
                {"id": "b", "value": 40, "classification": "cost", "creditEligibility": "ineligible"},
            ],
        }
    )

    assert [item.id for item in config.expenses] == ["a", "b"]
    assert config.expenses[0].classification == ExpenseClassification.OPERATING_EXPENSE
    assert config.operating_expenses_total == 100
    assert calculate_pis_cofins(config).pis.expense_credits["a"].value == pytest.approx(1.65)


def test_null_enum_fields_fall_back_to_defaults():
    config = normalize_configuration({"grossRevenue": 10, "period": None, "interstateDestination": None})

    assert config.period == Period.MONTHLY
    assert config.interstate_destination == InterstateDestination.SOUTH_SOUTHEAST
    assert config.gross_revenue == 10


def test_null_expense_value_defaults_to_zero():
    config = normalize_configuration(
        {"expenses": [{"id": "a", "classification": "cost", "value": None, "description": None}]}
    )

    assert len(config.expenses) == 1
    assert config.expenses[0].value == 0
    assert config.expenses[0].description == ""


def test_validation_reports_negative_flat_credits():
    config = TaxConfiguration(gross_revenue=1000, icms_other_credits=-10, cofins_opening_inventory_credit=-1)
    fields = [issue.field for issue in validate_configuration(config)]

    assert "icms_other_credits" in fields
    assert "cofins_opening_inventory_credit" in fields
