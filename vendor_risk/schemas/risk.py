from datetime import datetime

from pydantic import BaseModel, Field


# Respuesta
class RiskAssessmentOut(BaseModel):
    id: int
    vendor_id: int
    financial_risk_score: float = Field(..., ge=0, le=1)
    operational_risk_score: float = Field(..., ge=0, le=1)
    security_compliance_risk_score: float = Field(..., ge=0, le=1)
    final_risk_score: float = Field(..., ge=0, le=1)
    risk_level: str = Field(..., description="Low, Medium, High, Critical")
    explanation: str
    assessed_at: datetime
    assessed_by: str

    model_config = {"from_attributes": True}
