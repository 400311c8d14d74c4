from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import logging
import time
import uuid
from typing import Callable, Optional

logger = logging.getLogger(__name__)

def action_type_for(path: str) -> str:
    if path.startswith("/authorize-handler"):
        return "AUTHORIZE"
    if path.startswith("/webhook-handler"):
        return "WEBHOOK"
    if path.startswith("/api/custom-values/submit"):
        return "SUBMIT"
    if path.startswith("/api/custom-values"):
        return "READ_CUSTOM_VALUES"
    if path.startswith("/health"):
        return "HEALTH_CHECK"
    return "PAGE"

def location_id_for(request: Request) -> Optional[str]:
    # Query string covers the OAuth redirect and the form page, path covers the proxy read.
    location_id = request.query_params.get("location_id") or request.query_params.get("locationId")
    if location_id:
        return location_id
    path = request.url.path
    prefix = "/api/custom-values/"
    if path.startswith(prefix) and path != prefix + "submit":
        return path[len(prefix):] or None
    return None

class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        action_type = action_type_for(request.url.path)
        location_id = location_id_for(request) or "-"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                f"{request.method} {request.url.path} action={action_type} "
                f"location={location_id} request_id={request_id} failed after {elapsed_ms:.1f}ms"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} action={action_type} location={location_id} "
            f"status={response.status_code} request_id={request_id} {elapsed_ms:.1f}ms"
        )
        response.headers["X-Request-ID"] = request_id
        return response
