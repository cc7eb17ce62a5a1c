import json
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vendor_risk.core.logger import get_logger
from vendor_risk.schemas.vendors import VendorSeedFile
from vendor_risk.services.vendor_store import build_vendor, count_vendors

log = get_logger(__name__)


def load_seed_file(path: Path) -> Optional[VendorSeedFile]:
    """
    Lee y valida el JSON de ejemplo:
        {"vendors": [{"name": ..., "financial_health": ..., ...}]}
    Devuelve None si el archivo no existe.
    """
    path = Path(path)
    if not path.exists():
        log.warning(f"No se encontró el archivo de datos de ejemplo: {path}")
        return None

    log.info(f"Cargando datos de ejemplo desde: {path}")
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)

    return VendorSeedFile.model_validate(raw)


def seed_vendors(db: Session, path: Path) -> int:
    """
    Inserta los proveedores de ejemplo si la tabla está vacía.
    Devuelve la cantidad insertada (0 si no hizo nada).
    """
    if count_vendors(db) > 0:
        log.info("La base ya tiene proveedores. Se omite el seed.")
        return 0

    seed = load_seed_file(path)
    if seed is None:
        return 0

    if not seed.vendors:
        log.warning("El archivo de ejemplo no contiene proveedores.")
        return 0

    log.info(f"Encontrados {len(seed.vendors)} proveedores para insertar")

    try:
        for data in seed.vendors:
            db.add(build_vendor(data))
            log.debug(f"Proveedor agregado: {data.name}")
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.error("Error insertando los datos de ejemplo; se hizo rollback")
        raise

    log.info(f"Se insertaron {len(seed.vendors)} proveedores")
    return len(seed.vendors)
