from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vendor_risk.core.exceptions import register_exception_handlers
from vendor_risk.core.logger import get_logger
from vendor_risk.core.middleware import CorrelationIdMiddleware
from vendor_risk.core.settings import get_settings

settings = get_settings()
log = get_logger(__name__)


# Configuracion general de la API
class AppConfig:
    """
    Configuración general de la app
    Manejo de:
      - CORS
      - Correlation id
      - Handlers de errores
      - Prefix de API
    """

    API_PREFIX = "/api/v1"
    APP_NAME = settings.APP_NAME
    DEBUG = settings.DEBUG

    # Orígenes permitidos
    CORS_ORIGINS = settings.CORS_ORIGINS

    @staticmethod
    def init_app(app: FastAPI):
        # CORS
        app.add_middleware(
            CORSMiddleware,
            allow_origins=AppConfig.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Total-Count", "X-Page", "X-Page-Size", "X-Correlation-ID"],
        )
        app.add_middleware(CorrelationIdMiddleware)

        # Errores
        register_exception_handlers(app)

        # Logging
        log.info(f"== Iniciando {AppConfig.APP_NAME} ==")
        log.info(f"Debug: {AppConfig.DEBUG}")
        log.info(f"API prefix: {AppConfig.API_PREFIX}")
        log.info(f"Redondeo del score final: {settings.SCORE_ROUNDING}")

        return app


def get_api_prefix() -> str:
    return AppConfig.API_PREFIX
