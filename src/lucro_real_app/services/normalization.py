from __future__ import annotations

from typing import Any, Dict, Mapping

from loguru import logger

from ..models.config import TaxConfiguration

# Field names used by the stored scenarios of the web application
LEGACY_FIELDS: Dict[str, str] = {
    "icmsInterno": "icms_internal",
    "icmsSul": "icms_interstate_south",
    "icmsNorte": "icms_interstate_north",
    "pisAliq": "pis_rate",
    "cofinsAliq": "cofins_rate",
    "irpjBase": "irpj_base_rate",
    "irpjAdicional": "irpj_surtax_rate",
    "limiteIrpj": "irpj_monthly_threshold",
    "csllAliq": "csll_rate",
    "issAliq": "iss_rate",
    "receitaBruta": "gross_revenue",
    "vendasInternas": "percent_internal_sales",
    "vendasInterestaduais": "percent_interstate_sales",
    "consumidorFinal": "percent_final_consumer",
    "percentualST": "percent_substituicao_tributaria",
    "percentualMonofasico": "percent_monofasico",
    "comprasInternas": "internal_purchases",
    "comprasInterestaduais": "interstate_purchases",
    "cmvTotal": "cost_of_goods_sold",
    "energiaEletrica": "energy",
    "alugueis": "rent",
    "arrendamento": "leasing",
    "frete": "freight",
    "depreciacao": "depreciation",
    "combustiveis": "fuel",
    "valeTransporte": "transit_voucher",
    "adicoesLucro": "additions",
    "exclusoesLucro": "exclusions",
    "creditoEstoqueInicial": "icms_opening_inventory_credit",
    "creditoAtivoImobilizado": "icms_fixed_assets_credit",
    "creditoEnergiaIndustria": "icms_industrial_energy_credit",
    "creditoSTEntrada": "icms_substitution_entry_credit",
    "outrosCreditos": "icms_other_credits",
    "creditoPISEstoqueInicial": "pis_opening_inventory_credit",
    "creditoCOFINSEstoqueInicial": "cofins_opening_inventory_credit",
    "creditoPISOutros": "pis_other_credits",
    "creditoCOFINSOutros": "cofins_other_credits",
    "despesasDinamicas": "expenses",
    "periodo": "period",
}

LEGACY_EXPENSE_FIELDS: Dict[str, str] = {
    "descricao": "description",
    "valor": "value",
    "tipo": "classification",
    "credito": "credit_eligibility",
    "categoria": "category",
}

LEGACY_VALUES: Dict[str, Dict[Any, str]] = {
    "classification": {"custo": "cost", "despesa": "operating_expense"},
    "credit_eligibility": {"com-credito": "eligible", "sem-credito": "ineligible"},
    "period": {"mensal": "monthly", "trimestral": "quarterly", "anual": "annual"},
}


def _translate(payload: Mapping[str, Any], names: Mapping[str, str]) -> Dict[str, Any]:
    translated: Dict[str, Any] = {}
    for key, value in payload.items():
        target = names.get(key, key)
        if target in LEGACY_VALUES and isinstance(value, str):
            value = LEGACY_VALUES[target].get(value, value)
        translated[target] = value
    return translated


def normalize_expense(raw: Any) -> Any:
    if not isinstance(raw, Mapping):
        return raw
    return _translate(raw, LEGACY_EXPENSE_FIELDS)


def normalize_configuration(payload: Mapping[str, Any]) -> TaxConfiguration:
    """Build a ``TaxConfiguration`` from a stored or submitted payload.

    Accepts snake_case names, their camelCase aliases and the Portuguese field
    names of previously saved scenarios. ``None`` numbers become zero and a
    missing expense list becomes empty; unparseable expenses are dropped.
    """
    data = _translate(payload, LEGACY_FIELDS)
    expenses = data.get("expenses")
    if expenses is not None and not isinstance(expenses, (list, tuple)):
        logger.warning("Expected a list of expenses, got {}; ignoring", type(expenses).__name__)
        expenses = None
    data["expenses"] = [normalize_expense(raw) for raw in expenses or []]
    return TaxConfiguration.model_validate(data)
