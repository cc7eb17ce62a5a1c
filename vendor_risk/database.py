from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from vendor_risk.core.logger import get_logger
from vendor_risk.core.settings import get_settings

settings = get_settings()
log = get_logger(__name__)

DATABASE_URL = settings.DATABASE_URL


def build_engine(url: str, **kwargs):
    # CONFIG PARA SQLITE (solo local)
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            **kwargs,
        )

    # CONFIG PARA POSTGRES / OTROS
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        **kwargs,
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()


def get_db() -> Session:
    """
    Cada request recibe una sesion limpia que se cierra al terminar.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Crea las tablas si no existen.
    """
    # Registra los modelos en el metadata antes de crear
    from vendor_risk.models import risk, vendors  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    log.info("Tablas verificadas/creadas.")
