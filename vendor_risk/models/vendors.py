from datetime import datetime

from sqlalchemy import JSON, BigInteger, Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship

from vendor_risk.database import Base
from vendor_risk.services.risk_model.profile import DocumentStatus


class VendorProfile(Base):
    __tablename__ = "vendor_profiles"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)

    # Metricas financieras / operativas
    financial_health = Column(Integer, nullable=False, index=True)   # 0-100
    sla_uptime = Column(Numeric(5, 2), nullable=False, index=True)    # porcentaje
    major_incidents = Column(Integer, nullable=False, default=0)

    # Lista de certificaciones: ["ISO27001", "SOC2", ...]
    security_certs = Column(JSON, nullable=False, default=list)

    # Validez de documentos
    contract_valid = Column(Boolean, nullable=False, default=False)
    privacy_policy_valid = Column(Boolean, nullable=False, default=False)
    pentest_report_valid = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    # Evaluaciones de riesgo (se borran con el proveedor)
    risk_assessments = relationship(
        "RiskAssessment",
        back_populates="vendor",
        cascade="all, delete-orphan",
        order_by="RiskAssessment.id.desc()",
    )

    @property
    def documents(self) -> DocumentStatus:
        return DocumentStatus(
            contract_valid=bool(self.contract_valid),
            privacy_policy_valid=bool(self.privacy_policy_valid),
            pentest_report_valid=bool(self.pentest_report_valid),
        )
