import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from vendor_risk.core.exceptions import unhandled_error_handler
from vendor_risk.core.logger import reset_correlation_id, set_correlation_id

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Propaga el header X-Correlation-ID:
      - lo toma del request o genera un UUID4
      - queda disponible para los logs durante el request
      - se devuelve en la respuesta, incluso en los 500
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        token = set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        except Exception as exc:
            # El handler global corre fuera de este middleware y perderia el header
            response = await unhandled_error_handler(request, exc)
        finally:
            reset_correlation_id(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
