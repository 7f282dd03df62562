"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from dues_gateway.api.main import create_app
from dues_gateway.domain.models import BillingConfig


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a fresh configuration holder"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def billing_config() -> BillingConfig:
    """Closing day 14, 50 per sub-period, billing from 2025-01-15"""
    return BillingConfig(
        base_amount=Decimal("50"),
        closing_day=14,
        due_day=15,
        grace_period_days=3,
        late_fee_pct=Decimal("10"),
        penalty_fee_pct=Decimal("20"),
        cutoff_date=date(2025, 1, 15),
    )


@pytest.fixture
def billing_config_payload() -> dict:
    """Same rules as billing_config, as the API expects them"""
    return {
        "base_amount": "50",
        "closing_day": 14,
        "due_day": 15,
        "grace_period_days": 3,
        "late_fee_pct": "10",
        "penalty_fee_pct": "20",
        "cutoff_date": "2025-01-15",
    }


@pytest.fixture
def store_record() -> dict:
    """Configuration record as the association stores it"""
    return {
        "montoMensual": 60,
        "diaCierre": 10,
        "diaVencimiento": 12,
        "diasProntoPago": 5,
        "porcentajeMorosidad": 2.5,
        "porcentajeSancion": 5,
        "fechaCorteISO": "2025-03-01",
        "sede": "Sede Central",
        "serieComprobantes": "B001",
        "numeroComprobanteActual": 120,
    }
