"""
Acceso a datos de proveedores y evaluaciones.

Los routers no hacen queries directas: todo pasa por aqui para que
los errores (no encontrado, rollback) se manejen en un solo lugar.
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vendor_risk.core.exceptions import ValidationError, VendorNotFoundError
from vendor_risk.core.logger import get_logger
from vendor_risk.core.settings import get_settings
from vendor_risk.models.risk import RiskAssessment
from vendor_risk.models.vendors import VendorProfile
from vendor_risk.schemas.vendors import VendorCreate
from vendor_risk.services.risk_model.assessment import RiskAssessmentResult
from vendor_risk.utils.validators import validate_page

settings = get_settings()
log = get_logger(__name__)


def get_vendor(db: Session, vendor_id: int) -> VendorProfile:
    vendor = db.query(VendorProfile).filter(VendorProfile.id == vendor_id).first()
    if not vendor:
        raise VendorNotFoundError(vendor_id)
    return vendor


def list_vendors(db: Session, page: int = 1, page_size: int = 10) -> tuple[list[VendorProfile], int]:
    """
    Devuelve (pagina, total). Los mas nuevos primero.
    """
    try:
        validate_page(page, page_size, settings.MAX_PAGE_SIZE)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    total = count_vendors(db)
    vendors = (
        db.query(VendorProfile)
        .order_by(VendorProfile.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return vendors, total


def count_vendors(db: Session) -> int:
    return db.query(func.count(VendorProfile.id)).scalar() or 0


def build_vendor(data: VendorCreate) -> VendorProfile:
    return VendorProfile(
        name=data.name,
        financial_health=data.financial_health,
        sla_uptime=data.sla_uptime,
        major_incidents=data.major_incidents,
        security_certs=list(data.security_certs),
        contract_valid=data.documents.contract_valid,
        privacy_policy_valid=data.documents.privacy_policy_valid,
        pentest_report_valid=data.documents.pentest_report_valid,
    )


def create_vendor(db: Session, data: VendorCreate) -> VendorProfile:
    vendor = build_vendor(data)
    _commit(db, vendor)
    log.info(f"Proveedor creado con ID {vendor.id}: {vendor.name}")
    return vendor


def delete_vendor(db: Session, vendor_id: int) -> None:
    vendor = get_vendor(db, vendor_id)
    try:
        db.delete(vendor)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    log.info(f"Proveedor eliminado con ID {vendor_id}")


def add_assessment(db: Session, vendor_id: int, result: RiskAssessmentResult) -> RiskAssessment:
    assessment = RiskAssessment(
        vendor_id=vendor_id,
        financial_risk_score=result.financial_risk_score,
        operational_risk_score=result.operational_risk_score,
        security_compliance_risk_score=result.security_compliance_risk_score,
        final_risk_score=result.final_risk_score,
        risk_level=result.risk_level.value,
        explanation=result.explanation,
        assessed_at=result.assessed_at,
        assessed_by=result.assessed_by,
    )
    _commit(db, assessment)
    return assessment


def list_assessments(db: Session, vendor_id: int) -> list[RiskAssessment]:
    # Valida que el proveedor exista
    get_vendor(db, vendor_id)
    return (
        db.query(RiskAssessment)
        .filter(RiskAssessment.vendor_id == vendor_id)
        .order_by(RiskAssessment.id.desc())
        .all()
    )


def _commit(db: Session, obj) -> None:
    # Si falla la escritura no queda nada a medias
    try:
        db.add(obj)
        db.commit()
        db.refresh(obj)
    except SQLAlchemyError:
        db.rollback()
        log.error(f"Error guardando {type(obj).__name__}; se hizo rollback")
        raise
