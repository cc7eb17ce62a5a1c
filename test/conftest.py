import os

# Antes de importar la app: BD en memoria y sin seed automatico
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vendor_risk.database import build_engine, get_db, init_db
from vendor_risk.main import app
from vendor_risk.services.risk_model.profile import VendorSnapshot


@pytest.fixture()
def db_session():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def client(db_session):
    def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_vendor():
    """Proveedor base: salud 75, SLA 95, sin incidentes, ISO27001, documentos validos."""

    def _make(**overrides):
        data = {
            "name": "Test Vendor",
            "financial_health": 75,
            "sla_uptime": 95,
            "major_incidents": 0,
            "security_certs": ["ISO27001"],
            "contract_valid": True,
            "privacy_policy_valid": True,
            "pentest_report_valid": True,
            "vendor_id": 1,
        }
        data.update(overrides)
        return VendorSnapshot.build(**data)

    return _make


@pytest.fixture()
def vendor_payload():
    def _payload(**overrides):
        data = {
            "name": "Integration Test Vendor",
            "financial_health": 80,
            "sla_uptime": 95,
            "major_incidents": 0,
            "security_certs": ["ISO27001"],
            "documents": {
                "contract_valid": True,
                "privacy_policy_valid": True,
                "pentest_report_valid": True,
            },
        }
        data.update(overrides)
        return data

    return _payload
