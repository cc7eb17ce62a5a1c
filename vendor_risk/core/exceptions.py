"""
Errores del dominio y handlers de FastAPI.

Todas las respuestas de error comparten el mismo cuerpo:
    type, title, status, detail, instance, timestamp (+ errors en validacion)
"""

from datetime import datetime
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vendor_risk.core.logger import get_logger

log = get_logger(__name__)

PROBLEM_TYPES = {
    status.HTTP_400_BAD_REQUEST: "https://tools.ietf.org/html/rfc7231#section-6.5.1",
    status.HTTP_404_NOT_FOUND: "https://tools.ietf.org/html/rfc7231#section-6.5.4",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "https://tools.ietf.org/html/rfc7231#section-6.6.1",
}


class VendorRiskError(Exception):
    """Base de todos los errores de la aplicacion."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "An error occurred while processing your request."

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(VendorRiskError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Resource Not Found"


class VendorNotFoundError(NotFoundError):
    def __init__(self, vendor_id: int):
        super().__init__(f"Vendor with ID {vendor_id} not found")
        self.vendor_id = vendor_id


class ValidationError(VendorRiskError):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Bad Request"


def error_body(
    status_code: int,
    title: str,
    detail: str,
    instance: str,
    errors: Optional[list[Any]] = None,
) -> dict:
    body = {
        "type": PROBLEM_TYPES.get(status_code, PROBLEM_TYPES[500]),
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": instance,
        "timestamp": datetime.utcnow().isoformat(),
    }
    if errors is not None:
        body["errors"] = errors
    return body


async def vendor_risk_error_handler(request: Request, exc: VendorRiskError):
    if exc.status_code >= 500:
        log.error(f"Error en {request.url.path}: {exc.detail}")
    else:
        log.warning(f"{exc.title} en {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.title, exc.detail, request.url.path),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    log.warning(f"Request invalido en {request.url.path}: {len(errors)} error(es)")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            status.HTTP_400_BAD_REQUEST,
            "Bad Request",
            "One or more validation errors occurred.",
            request.url.path,
            errors=errors,
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception(f"Excepcion no controlada en {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An error occurred while processing your request.",
            str(exc),
            request.url.path,
        ),
    )


def register_exception_handlers(app: FastAPI) -> FastAPI:
    app.add_exception_handler(VendorRiskError, vendor_risk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    return app
