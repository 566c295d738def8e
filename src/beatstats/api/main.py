import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from beatstats.config import settings
from beatstats.exceptions import InvalidArgumentError
from beatstats.api.routers import dashboard, system

logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))
logger = logging.getLogger("beatstats.api")


async def dashboard_request_context(request: Request, call_next):
    """
    Tags every call with a request id and, when enabled, logs one line per refresh.
    Routers may leave `item_count` on the request state; it is logged next to the `days` window.
    """
    rid = request.headers.get("x-request-id") or uuid4().hex
    request.state.request_id = rid
    start = time.perf_counter()
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    if settings.logging.log_requests:
        logger.info(
            "%s %s -> %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": rid,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                "days": request.query_params.get("days"),
                "item_count": getattr(request.state, "item_count", None),
            },
        )
    return response


def _error(request: Request, status_code: int, error: str, detail: str) -> JSONResponse:
    payload = {"error": error, "detail": detail}
    rid = getattr(request.state, "request_id", None)
    if rid:
        payload["request_id"] = rid
    return JSONResponse(status_code=status_code, content=payload)


def create_app() -> FastAPI:
    app = FastAPI(title="beatstats API", version=settings.app.version)
    if settings.app.cors_origins:
        app.add_middleware(CORSMiddleware, allow_origins=settings.app.cors_origins, allow_methods=["GET", "POST"])
    app.middleware("http")(dashboard_request_context)

    app.include_router(system.router)
    app.include_router(dashboard.router)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        return _error(request, 422, "invalid_argument", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return _error(request, 500, "internal_error", "Unexpected server error")

    return app


app = create_app()
