from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from vendor_risk.database import Base


class RiskAssessment(Base):
    __tablename__ = "risk_assessments"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    vendor_id = Column(
        BigInteger,
        ForeignKey("vendor_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Scores 0.00 - 1.00
    financial_risk_score = Column(Numeric(5, 2), nullable=False)
    operational_risk_score = Column(Numeric(5, 2), nullable=False)
    security_compliance_risk_score = Column(Numeric(5, 2), nullable=False)
    final_risk_score = Column(Numeric(5, 2), nullable=False, index=True)

    risk_level = Column(String(20), nullable=False, index=True)   # Low, Medium, High, Critical
    explanation = Column(String(1000), nullable=False)

    assessed_at = Column(DateTime, default=datetime.utcnow, index=True)
    assessed_by = Column(String(100), nullable=False, default="System")

    # RELACIÓN
    vendor = relationship("VendorProfile", back_populates="risk_assessments")
