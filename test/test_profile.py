from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from vendor_risk.schemas.vendors import VendorCreate
from vendor_risk.services.risk_model.profile import DocumentStatus, VendorSnapshot


def test_document_status_helpers():
    docs = DocumentStatus(contract_valid=True, privacy_policy_valid=False, pentest_report_valid=False)

    assert not docs.has_all_valid_documents()
    assert docs.invalid_document_count() == 2
    assert docs.invalid_documents() == ["Privacy Policy", "Pentest Report"]

    assert DocumentStatus(True, True, True).has_all_valid_documents()
    assert DocumentStatus().invalid_document_count() == 3


def test_snapshot_normalizes_types():
    vendor = VendorSnapshot(
        name="Acme",
        financial_health=70,
        sla_uptime=99.9,
        major_incidents=0,
        security_certs=["ISO27001", "SOC2"],
    )

    assert vendor.sla_uptime == Decimal("99.9")
    assert vendor.security_certs == frozenset({"ISO27001", "SOC2"})


def test_snapshot_is_immutable(make_vendor):
    vendor = make_vendor()
    with pytest.raises(FrozenInstanceError):
        vendor.financial_health = 10


def test_certification_helpers(make_vendor):
    vendor = make_vendor(security_certs=["ISO27001", "PCI-DSS"])

    assert vendor.has_iso27001()
    assert vendor.has_pci()
    assert not vendor.has_soc2()
    assert vendor.has_any_certifications()
    assert not make_vendor(security_certs=[]).has_any_certifications()


def test_certifications_are_case_sensitive(make_vendor):
    assert not make_vendor(security_certs=["iso27001"]).has_iso27001()


@pytest.mark.parametrize(
    "health, high, low",
    [(49, True, False), (50, False, False), (80, False, False), (81, False, True)],
)
def test_financial_helpers(make_vendor, health, high, low):
    vendor = make_vendor(financial_health=health)
    assert vendor.is_high_risk_financially() is high
    assert vendor.is_low_risk_financially() is low


def test_operational_helpers(make_vendor):
    assert make_vendor(sla_uptime=94.99).has_poor_sla()
    assert not make_vendor(sla_uptime=95).has_poor_sla()
    assert make_vendor(sla_uptime=99).has_excellent_sla()
    assert not make_vendor(sla_uptime=98.99).has_excellent_sla()
    assert make_vendor(major_incidents=3).has_multiple_incidents()
    assert not make_vendor(major_incidents=2).has_multiple_incidents()


def test_from_record_with_request_schema():
    data = VendorCreate(
        name="Acme",
        financial_health=60,
        sla_uptime=97.5,
        major_incidents=1,
        security_certs=["SOC2"],
        documents={"contract_valid": True, "privacy_policy_valid": False, "pentest_report_valid": True},
    )

    vendor = VendorSnapshot.from_record(data)

    assert vendor.vendor_id is None
    assert vendor.sla_uptime == Decimal("97.5")
    assert vendor.documents == DocumentStatus(True, False, True)
    assert vendor.has_soc2()
