from fastapi import FastAPI

from vendor_risk.config import AppConfig, get_api_prefix
from vendor_risk.core.logger import get_logger
from vendor_risk.core.settings import get_settings
from vendor_risk.database import SessionLocal, init_db
from vendor_risk.services.seeder import seed_vendors

# Routers v1
from vendor_risk.api.v1.health import router as health_router
from vendor_risk.api.v1.vendors import router as vendors_router

settings = get_settings()
log = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Evaluación determinista del riesgo de proveedores (financiero, operacional, seguridad).",
        version=settings.APP_VERSION,
    )

    # Config general (CORS, middlewares, errores)
    AppConfig.init_app(app)

    # Prefijo base /api/v1
    api_prefix = get_api_prefix()

    # rutas REST
    app.include_router(vendors_router, prefix=api_prefix)
    app.include_router(health_router, prefix=api_prefix)

    # Rutas básicas
    @app.get("/", tags=["Root"])
    def root():
        return {
            "message": f"{settings.APP_NAME} running",
            "docs": "/docs",
            "openapi": "/openapi.json",
            "health": f"{api_prefix}/health",
        }

    return app


app = create_app()


# Eventos de ciclo de vida
@app.on_event("startup")
def on_startup():
    log.info("Iniciando aplicación...")
    # Crear tablas si no existen
    init_db()

    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_vendors(db, settings.SEED_DATA_PATH)
        finally:
            db.close()

    log.info("Base de datos inicializada.")


# Ejecución directa
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vendor_risk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
