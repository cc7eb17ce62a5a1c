from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from vendor_risk.utils.validators import normalize_certifications, validate_non_empty_string


# Documentos
class DocumentValidation(BaseModel):
    contract_valid: bool = False
    privacy_policy_valid: bool = False
    pentest_report_valid: bool = False

    model_config = {"from_attributes": True}


# Base
class VendorBase(BaseModel):
    name: str = Field(..., max_length=200)
    financial_health: int = Field(..., ge=0, le=100, description="Financial health 0-100")
    sla_uptime: float = Field(..., ge=0, le=100, description="SLA uptime percentage 0-100")
    major_incidents: int = Field(0, ge=0, description="Major incidents in the last 12 months")
    security_certs: List[str] = Field(default_factory=list)
    documents: DocumentValidation


# Crear proveedor
class VendorCreate(VendorBase):

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_non_empty_string(value, "name")

    @field_validator("security_certs")
    @classmethod
    def _check_certs(cls, value: List[str]) -> List[str]:
        return normalize_certifications(value)


# Respuesta
class VendorOut(VendorBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# Archivo de datos de ejemplo
class VendorSeedFile(BaseModel):
    vendors: List[VendorCreate] = []
