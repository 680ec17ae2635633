# tests/fixtures/deals.py

from flipcheck.domain.deal import Deal


def textbook_flip() -> Deal:
    """
    100k buy, 200k ARV, 30k rehab, 6 month hold on 12% / 2 pt hard money.

    Hand-checked numbers:
      acquisition  down 20,000, points 1,600, total 21,600
      financing    loan 80,000, 800 / month, 4,800 total
      rehab        30,000 + 3,000 contingency = 33,000
      selling      12,000 commission + 6,000 closing = 18,000
      project cost 139,400, net profit 42,600
    """
    return Deal(
        address="123 Test St",
        zipcode="30301",
        purchase_price=100_000,
        arv=200_000,
        down_payment_percent=20,
        rehab_costs=30_000,
        contingency_percent=10,
        holding_months=6,
        hard_money_rate=12,
        hard_money_points=2,
        realtor_commission=6,
        closing_costs_selling=3,
    )


def textbook_flip_with_carry() -> Deal:
    """textbook_flip plus $500 / month of carrying costs (3,000 over the hold)."""
    return textbook_flip().model_copy(
        update={
            "property_tax": 200.0,
            "insurance": 100.0,
            "utilities": 150.0,
            "lawn_maintenance": 50.0,
        }
    )


def textbook_payload_camel() -> dict:
    """The textbook deal as a form would send it."""
    return {
        "address": "123 Test St",
        "zipCode": "30301",
        "purchasePrice": "100,000",
        "arv": 200000,
        "downPaymentPercent": "20%",
        "rehabCosts": 30000,
        "contingencyPercent": 10,
        "holdingMonths": 6,
        "hardMoneyRate": 12,
        "hardMoneyPoints": 2,
        "realtorCommission": 6,
        "closingCostsSelling": 3,
    }
