"""Integration tests for API endpoints"""

from decimal import Decimal
from unittest.mock import patch
from fastapi.testclient import TestClient
from dues_gateway.api.main import create_app
from dues_gateway.config import settings
from dues_gateway.domain.billing_config import default_billing_config
from dues_gateway.domain.config_store import BillingConfigStore


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "dues-gateway"
    assert data["billing_cutoff_date"] == "2025-01-15"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/debt", json={"join_date": "2025-03-01", "evaluation_date": "2025-03-20"})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "dues_debt_report_total" in response.text
    assert "dues_sub_periods_owed" in response.text


def test_request_id_header_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    minted = client.get("/health")
    assert minted.headers["X-Request-ID"]


def test_debt_endpoint_with_config_override(client: TestClient, billing_config_payload: dict):
    """Test POST /v1/debt with explicit rules"""
    response = client.post(
        "/v1/debt",
        json={
            "member_id": "emp_001",
            "join_date": "2025-03-01",
            "evaluation_date": "2025-03-20",
            "config": billing_config_payload,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["member_id"] == "emp_001"
    assert data["sub_periods_owed"] == 1
    assert Decimal(data["amount_owed"]) == Decimal("50")
    assert data["range_start"] == "2025-03-01"
    assert data["range_end"] == "2025-03-20"
    assert data["delinquent"] is True
    assert data["band"] == "in_arrears"
    assert data["label"] == "contributor"


def test_debt_endpoint_uses_default_config(client: TestClient):
    """Defaults: 50 monthly (25 per sub-period), closing day 14, cutoff 2025-01-15"""
    response = client.post(
        "/v1/debt",
        json={"join_date": "2025-01-01", "evaluation_date": "2025-02-01"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["range_start"] == "2025-01-15"
    assert data["sub_periods_owed"] == 1
    assert Decimal(data["amount_owed"]) == Decimal("25")


def test_debt_endpoint_epoch_join_date(client: TestClient):
    response = client.post(
        "/v1/debt",
        json={"join_date": 1740787200000, "evaluation_date": "2025-03-20"},
    )

    assert response.status_code == 200
    assert response.json()["range_start"] == "2025-03-01"


def test_debt_endpoint_malformed_join_date_is_zero_debt(client: TestClient):
    response = client.post(
        "/v1/debt",
        json={"join_date": "", "evaluation_date": "2025-06-01"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["sub_periods_owed"] == 0
    assert data["delinquent"] is False
    assert data["range_start"] == "2025-06-01"


def test_debt_endpoint_strict_rejects_malformed_join_date(client: TestClient):
    response = client.post(
        "/v1/debt",
        json={"join_date": "01/03/2025", "evaluation_date": "2025-06-01", "strict": True},
    )
    assert response.status_code == 422


def test_debt_endpoint_rejects_invalid_config_override(client: TestClient, billing_config_payload: dict):
    billing_config_payload["closing_day"] = 40
    response = client.post(
        "/v1/debt",
        json={"join_date": "2025-03-01", "config": billing_config_payload},
    )
    assert response.status_code == 422


def test_get_billing_config_defaults(client: TestClient):
    response = client.get("/v1/billing-config")

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["base_amount"]) == Decimal("25")
    assert data["closing_day"] == 14
    assert data["cutoff_date"] == "2025-01-15"


def test_put_billing_config_changes_debt(client: TestClient, store_record: dict):
    """Pushed configuration is used by later debt requests"""
    put_response = client.put("/v1/billing-config", json=store_record)

    assert put_response.status_code == 200
    config = put_response.json()
    assert Decimal(config["base_amount"]) == Decimal("30")
    assert config["closing_day"] == 10
    assert config["cutoff_date"] == "2025-03-01"
    assert config["receipt_series"] == "B001"

    # Billing from 2025-03-01, closing day 10: Mar 10 and Mar 31 have closed
    debt_response = client.post(
        "/v1/debt",
        json={"join_date": "2024-06-01", "evaluation_date": "2025-04-05"},
    )
    data = debt_response.json()
    assert data["range_start"] == "2025-03-01"
    assert data["sub_periods_owed"] == 2
    assert Decimal(data["amount_owed"]) == Decimal("60")


def test_put_billing_config_rejects_non_object(client: TestClient):
    response = client.put("/v1/billing-config", json=["montoMensual", 60])
    assert response.status_code == 422


def test_delete_billing_config_resets(client: TestClient, store_record: dict):
    client.put("/v1/billing-config", json=store_record)

    response = client.delete("/v1/billing-config")

    assert response.status_code == 200
    assert response.json()["closing_day"] == 14
    assert client.get("/v1/billing-config").json()["closing_day"] == 14


def test_debt_batch_endpoint(client: TestClient):
    """Test POST /v1/debt/batch totals"""
    response = client.post(
        "/v1/debt/batch",
        json={
            "evaluation_date": "2025-04-20",
            "members": [
                {"member_id": "a", "join_date": "2025-03-01"},
                {"member_id": "b", "join_date": "2025-04-19"},
                {"member_id": "c", "join_date": None},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    owed = {report["member_id"]: report["sub_periods_owed"] for report in data["reports"]}
    assert owed == {"a": 3, "b": 0, "c": 0}
    assert data["total_sub_periods_owed"] == 3
    assert Decimal(data["total_amount_owed"]) == Decimal("75")
    assert data["delinquent_count"] == 1


def test_debt_batch_strict_rejects_bad_member(client: TestClient):
    response = client.post(
        "/v1/debt/batch",
        json={
            "strict": True,
            "members": [
                {"member_id": "a", "join_date": "2025-03-01"},
                {"member_id": "bad", "join_date": "soon"},
            ],
        },
    )

    assert response.status_code == 422
    assert "bad" in response.json()["detail"]


def test_debt_batch_requires_members(client: TestClient):
    response = client.post("/v1/debt/batch", json={"members": []})
    assert response.status_code == 422


def test_put_billing_config_out_of_range_field_falls_back(client: TestClient):
    """An unusable field keeps its default; the rest of the record applies"""
    put_response = client.put("/v1/billing-config", json={"diaVencimiento": 0, "montoMensual": 80})

    assert put_response.status_code == 200
    assert put_response.json()["due_day"] == 15
    assert Decimal(put_response.json()["base_amount"]) == Decimal("40")

    get_response = client.get("/v1/billing-config")
    assert get_response.status_code == 200
    assert get_response.json()["due_day"] == 15


def test_put_billing_config_negative_amount_never_charges_negative(client: TestClient):
    put_response = client.put("/v1/billing-config", json={"montoMensual": -100})

    assert put_response.status_code == 200
    assert Decimal(put_response.json()["base_amount"]) == Decimal("25")
    assert client.get("/v1/billing-config").status_code == 200

    debt_response = client.post(
        "/v1/debt",
        json={"join_date": "2025-03-01", "evaluation_date": "2025-03-20"},
    )
    assert Decimal(debt_response.json()["amount_owed"]) == Decimal("25")


def test_debt_batch_shares_one_evaluation_date(client: TestClient):
    """Without an evaluation date every report is evaluated on the same day"""
    response = client.post(
        "/v1/debt/batch",
        json={"members": [{"member_id": str(i), "join_date": "2025-03-01"} for i in range(5)]},
    )

    assert response.status_code == 200
    range_ends = {report["range_end"] for report in response.json()["reports"]}
    assert len(range_ends) == 1


@patch("dues_gateway.api.v1.debt.assess_member", side_effect=RuntimeError("boom"))
def test_debt_batch_unexpected_error_is_500(mock_assess, client: TestClient):
    response = client.post(
        "/v1/debt/batch",
        json={"members": [{"member_id": "a", "join_date": "2025-03-01"}]},
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


@patch("dues_gateway.api.v1.debt.assess_member", side_effect=RuntimeError("boom"))
def test_debt_unexpected_error_is_500(mock_assess, client: TestClient):
    response = client.post("/v1/debt", json={"join_date": "2025-03-01"})
    assert response.status_code == 500


def test_create_app_uses_injected_config_store(store_record: dict):
    store = BillingConfigStore(default_billing_config(settings))
    store.apply(store_record)

    client = TestClient(create_app(config_store=store))

    assert client.get("/v1/billing-config").json()["closing_day"] == 10
    assert client.get("/health").json()["billing_cutoff_date"] == "2025-03-01"
