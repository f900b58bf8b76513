from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from loancalc.api.app import app

SMALL_LOAN = {
    "loan": "1000",
    "interest_pct": "1",
    "terms": 12,
    "start_date": "2021-01-10",
    "due_day": "first",
}


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestScheduleRoute:
    def test_small_loan(self, client):
        resp = client.post("/api/v1/schedule", json=SMALL_LOAN)
        assert resp.status_code == 200
        data = resp.json()

        summary = data["summary"]
        assert Decimal(summary["principal"]) == Decimal("1000")
        assert summary["completed_terms"] == 12
        assert summary["end_date"] == "2022-01-01"
        assert len(data["payments"]) == 12
        assert Decimal(data["payments"][-1]["balance"]) == Decimal("0")
        assert [y["year"] for y in data["yearly"]] == [2021, 2022]

    def test_with_events(self, client):
        body = dict(SMALL_LOAN, extra_payments=[{"period": 2, "amount": "100"}])
        data = client.post("/api/v1/schedule", json=body).json()
        assert data["summary"]["completed_terms"] == 11
        assert Decimal(data["summary"]["total_extra"]) == Decimal("100")

    def test_years_default(self, client):
        body = {"loan": "400000", "interest_pct": "7", "years": 30, "start_date": "2025-01-10"}
        data = client.post("/api/v1/schedule", json=body).json()
        assert data["summary"]["planned_terms"] == 360
        assert Decimal(data["summary"]["periodic_payment"]) == Decimal("2661.21")

    def test_quarterly(self, client):
        body = dict(SMALL_LOAN, terms=8, terms_per_year=4)
        data = client.post("/api/v1/schedule", json=body).json()
        assert len(data["payments"]) == 8
        assert data["payments"][1]["due_date"] == "2021-05-01"

    def test_invalid_terms_per_year(self, client):
        resp = client.post("/api/v1/schedule", json=dict(SMALL_LOAN, terms_per_year=5))
        assert resp.status_code == 400
        assert "terms per year" in resp.json()["detail"]

    def test_negative_principal(self, client):
        resp = client.post("/api/v1/schedule", json=dict(SMALL_LOAN, loan="-5"))
        assert resp.status_code == 400
        assert "principal" in resp.json()["detail"]

    def test_event_outside_term(self, client):
        body = dict(SMALL_LOAN, rate_changes=[{"period": 40, "interest_pct": "2"}])
        resp = client.post("/api/v1/schedule", json=body)
        assert resp.status_code == 400

    def test_term_count_too_long(self, client):
        resp = client.post("/api/v1/schedule", json=dict(SMALL_LOAN, terms=100000))
        assert resp.status_code == 400
        assert "term count" in resp.json()["detail"]

    def test_payment_term_count_too_long(self, client):
        resp = client.post("/api/v1/payment", json=dict(SMALL_LOAN, terms=100000))
        assert resp.status_code == 400

    def test_terms_and_years_conflict(self, client):
        resp = client.post("/api/v1/schedule", json=dict(SMALL_LOAN, years=1))
        assert resp.status_code == 422

    def test_missing_loan(self, client):
        resp = client.post("/api/v1/schedule", json={"interest_pct": "1"})
        assert resp.status_code == 422


class TestPaymentRoute:
    def test_quote(self, client):
        body = {"loan": "400000", "interest_pct": "7", "years": 30, "start_date": "2025-01-10",
                "installment_fee": "45"}
        resp = client.post("/api/v1/payment", json=body)
        assert resp.status_code == 200
        quote = resp.json()
        assert Decimal(quote["periodic_payment"]) == Decimal("2661.21")
        assert Decimal(quote["installment_fee"]) == Decimal("45")
        assert quote["planned_terms"] == 360
        assert Decimal(quote["effective_rate"]) == Decimal("0.0723")
        assert quote["first_due_date"] == "2025-01-20"
        assert quote["planned_end_date"] == "2054-12-20"

    def test_invalid(self, client):
        resp = client.post("/api/v1/payment", json=dict(SMALL_LOAN, interest_pct="0"))
        assert resp.status_code == 400
