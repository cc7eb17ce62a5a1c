from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from vendor_risk.api.deps import get_risk_scorer
from vendor_risk.core.logger import get_logger
from vendor_risk.core.settings import get_settings
from vendor_risk.database import get_db
from vendor_risk.schemas.risk import RiskAssessmentOut
from vendor_risk.schemas.vendors import VendorCreate, VendorOut
from vendor_risk.services import vendor_store
from vendor_risk.services.risk_model.profile import VendorSnapshot
from vendor_risk.services.risk_model.risk_scorer import RiskScorer

settings = get_settings()
log = get_logger(__name__)

router = APIRouter(prefix="/vendors", tags=["Vendors"])


# CREAR PROVEEDOR
@router.post("", response_model=VendorOut, status_code=status.HTTP_201_CREATED)
def create_vendor(
    data: VendorCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    log.info(f"Creando proveedor: {data.name}")
    vendor = vendor_store.create_vendor(db, data)
    response.headers["Location"] = str(request.url_for("get_vendor", vendor_id=vendor.id))
    return vendor


# LISTAR PROVEEDORES (paginado, mas nuevos primero; el store valida page/page_size)
@router.get("", response_model=list[VendorOut])
def list_vendors(
    response: Response,
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    log.info(f"Listando proveedores - page={page}, page_size={page_size}")
    vendors, total = vendor_store.list_vendors(db, page=page, page_size=page_size)

    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Page"] = str(page)
    response.headers["X-Page-Size"] = str(page_size)
    return vendors


# PROVEEDOR POR ID
@router.get("/{vendor_id}", response_model=VendorOut)
def get_vendor(vendor_id: int, db: Session = Depends(get_db)):
    return vendor_store.get_vendor(db, vendor_id)


# CALCULAR Y GUARDAR EVALUACION DE RIESGO
@router.get("/{vendor_id}/risk", response_model=RiskAssessmentOut)
def assess_vendor(
    vendor_id: int,
    db: Session = Depends(get_db),
    scorer: RiskScorer = Depends(get_risk_scorer),
):
    """
    Formula:
      - Financiero: por financial_health (0-100)
      - Operacional: SLA + incidentes
      - Seguridad/Cumplimiento: certificaciones + documentos
      - Final: (Financiero x 0.4) + (Operacional x 0.3) + (Seguridad x 0.3)
    """
    log.info(f"Calculando evaluacion de riesgo para el proveedor {vendor_id}")

    vendor = vendor_store.get_vendor(db, vendor_id)
    result = scorer.assess(VendorSnapshot.from_record(vendor))
    assessment = vendor_store.add_assessment(db, vendor.id, result)

    log.info(
        f"Evaluacion guardada para el proveedor {vendor_id}: "
        f"level={assessment.risk_level}, score={assessment.final_risk_score}"
    )
    return assessment


# HISTORIAL DE EVALUACIONES
@router.get("/{vendor_id}/assessments", response_model=list[RiskAssessmentOut])
def list_assessments(vendor_id: int, db: Session = Depends(get_db)):
    return vendor_store.list_assessments(db, vendor_id)


# ELIMINAR PROVEEDOR (y sus evaluaciones)
@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vendor(vendor_id: int, db: Session = Depends(get_db)):
    log.info(f"Eliminando proveedor {vendor_id}")
    vendor_store.delete_vendor(db, vendor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
