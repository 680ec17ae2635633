import pytest

from flipcheck.adapters.deal_mapping import deal_from_payload, intelligence_from_payload
from flipcheck.analysis.profitability import evaluate_deal

from fixtures.deals import textbook_flip, textbook_payload_camel


def test_camel_case_payload_matches_explicit_deal():
    deal = deal_from_payload(textbook_payload_camel())
    assert deal.purchase_price == 100_000
    assert deal.down_payment_percent == 20
    assert deal.zipcode == "30301"
    assert evaluate_deal(deal).net_profit == pytest.approx(evaluate_deal(textbook_flip()).net_profit)


def test_legacy_database_columns():
    row = {
        "purchase_price": 150_000,
        "arv": 250_000,
        "realtor_commission_percent": 5.5,
        "seller_closing_costs_percent": 2,
        "permit_inspection_fees": 1_200,
        "inspection_costs": 450,
        "title_costs": 900,
        "staging_costs": 1_500,
        "zip_code": 30318,
    }
    deal = deal_from_payload(row)

    assert deal.realtor_commission == 5.5
    assert deal.closing_costs_selling == 2
    assert deal.permit_fees == 1_200
    assert deal.inspection_cost == 450
    assert deal.title_insurance == 900
    assert deal.staging_cost == 1_500
    assert deal.zipcode == "30318"


def test_first_usable_alias_wins():
    deal = deal_from_payload({"rehab_costs": "", "rehabCosts": "40,000", "inspection_cost": 0, "inspectionCost": 300})
    assert deal.rehab_costs == 40_000
    # an explicit zero is a usable value
    assert deal.inspection_cost == 0


def test_missing_and_garbage_values_default_to_zero():
    deal = deal_from_payload({"purchasePrice": "call me", "arv": None, "riskScore": "n/a"})
    assert deal.purchase_price == 0
    assert deal.arv == 0
    assert deal.risk_score is None


def test_scores_and_property_facts():
    deal = deal_from_payload({"riskScore": 0, "marketScore": "85", "yearBuilt": "1962", "propertyType": "Condo"})
    assert deal.risk_score == 0
    assert deal.market_score == 85
    assert deal.year_built == 1962
    assert deal.property_type == "Condo"


def test_deal_passes_through_unchanged():
    deal = textbook_flip()
    assert deal_from_payload(deal) is deal


def test_property_intelligence_block():
    assert intelligence_from_payload({}) is None

    intel = intelligence_from_payload(
        {"propertyIntelligence": {"yearBuilt": 1955, "propertyType": "Townhouse", "roofAge": "15 years"}}
    )
    assert intel.year_built == 1955
    assert intel.property_type == "Townhouse"
    assert intel.roof_age == "15 years"
