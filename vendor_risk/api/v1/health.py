from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vendor_risk.core.logger import get_logger
from vendor_risk.core.settings import get_settings
from vendor_risk.database import get_db

settings = get_settings()
log = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


# verifica estado del backend
@router.get("")
def health_check():
    return {
        "status": "Healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": settings.APP_VERSION,
    }


# Verifica conexion a la BD
@router.get("/db")
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.error(f"Health check de BD fallido: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "Unhealthy", "detail": str(e)},
        )
    return {"status": "Healthy"}
