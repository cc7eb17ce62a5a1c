"""
Snapshot inmutable de un proveedor, tal como lo lee el scorer.

El scorer nunca toca el modelo ORM: recibe un VendorSnapshot
construido desde la BD, un schema o cualquier objeto con los mismos atributos.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Optional

ISO27001 = "ISO27001"
SOC2 = "SOC2"
PCI_DSS = "PCI-DSS"


def to_decimal(value: Any) -> Decimal:
    # str() evita arrastrar el error binario de los float
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class DocumentStatus:
    contract_valid: bool = False
    privacy_policy_valid: bool = False
    pentest_report_valid: bool = False

    def has_all_valid_documents(self) -> bool:
        return self.contract_valid and self.privacy_policy_valid and self.pentest_report_valid

    def invalid_documents(self) -> list[str]:
        invalid = []
        if not self.contract_valid:
            invalid.append("Contract")
        if not self.privacy_policy_valid:
            invalid.append("Privacy Policy")
        if not self.pentest_report_valid:
            invalid.append("Pentest Report")
        return invalid

    def invalid_document_count(self) -> int:
        return len(self.invalid_documents())


@dataclass(frozen=True)
class VendorSnapshot:
    name: str
    financial_health: int
    sla_uptime: Decimal
    major_incidents: int
    security_certs: frozenset = field(default_factory=frozenset)
    documents: DocumentStatus = field(default_factory=DocumentStatus)
    vendor_id: Optional[int] = None

    def __post_init__(self):
        # Normaliza tipos sin romper la inmutabilidad
        object.__setattr__(self, "sla_uptime", to_decimal(self.sla_uptime))
        object.__setattr__(self, "security_certs", frozenset(self.security_certs or ()))

    @classmethod
    def build(
        cls,
        name: str,
        financial_health: int,
        sla_uptime,
        major_incidents: int,
        security_certs: Iterable[str] = (),
        contract_valid: bool = True,
        privacy_policy_valid: bool = True,
        pentest_report_valid: bool = True,
        vendor_id: Optional[int] = None,
    ) -> "VendorSnapshot":
        return cls(
            name=name,
            financial_health=financial_health,
            sla_uptime=sla_uptime,
            major_incidents=major_incidents,
            security_certs=frozenset(security_certs),
            documents=DocumentStatus(contract_valid, privacy_policy_valid, pentest_report_valid),
            vendor_id=vendor_id,
        )

    @classmethod
    def from_record(cls, record: Any) -> "VendorSnapshot":
        """
        Construye el snapshot desde un VendorProfile (ORM) o un VendorCreate.
        Ambos exponen `documents` con los tres flags.
        """
        docs = record.documents
        return cls(
            name=record.name,
            financial_health=int(record.financial_health),
            sla_uptime=record.sla_uptime,
            major_incidents=int(record.major_incidents),
            security_certs=frozenset(record.security_certs or ()),
            documents=DocumentStatus(
                bool(docs.contract_valid),
                bool(docs.privacy_policy_valid),
                bool(docs.pentest_report_valid),
            ),
            vendor_id=getattr(record, "id", None),
        )

    # Certificaciones
    def has_iso27001(self) -> bool:
        return ISO27001 in self.security_certs

    def has_soc2(self) -> bool:
        return SOC2 in self.security_certs

    def has_pci(self) -> bool:
        return PCI_DSS in self.security_certs

    def has_any_certifications(self) -> bool:
        return len(self.security_certs) > 0

    # Salud financiera
    def is_high_risk_financially(self) -> bool:
        return self.financial_health < 50

    def is_low_risk_financially(self) -> bool:
        return self.financial_health > 80

    # Operacion
    def has_poor_sla(self) -> bool:
        return self.sla_uptime < 95

    def has_excellent_sla(self) -> bool:
        return self.sla_uptime >= 99

    def has_multiple_incidents(self) -> bool:
        return self.major_incidents > 2
