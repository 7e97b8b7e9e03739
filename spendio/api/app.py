from __future__ import annotations

from pathlib import Path
from time import perf_counter
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from spendio.api.dependencies import build_context
from spendio.api.error_handlers import register_error_handlers
from spendio.api.routers.accounts import router as accounts_router
from spendio.api.routers.analytics import router as analytics_router
from spendio.api.routers.backup import router as backup_router
from spendio.api.routers.budgets import router as budgets_router
from spendio.api.routers.categories import income_router as income_categories_router
from spendio.api.routers.categories import router as categories_router
from spendio.api.routers.expenses import router as entries_router
from spendio.api.routers.health import router as health_router
from spendio.api.routers.settings import router as settings_router
from spendio.api.routers.transfers import router as transfers_router
from spendio.domain.ports.kv_store import KeyValueStorePort
from spendio.logger import get_logger, reset_request_id, set_request_id, setup_logging
from spendio.settings import Settings, load_settings

API_PREFIX = "/api/v1"


def _store_scope(path: str) -> str:
    # /api/v1/{collection}/...
    parts = [seg for seg in path.split("/") if seg]
    if len(parts) >= 3 and parts[0] == "api" and parts[1] == "v1":
        return parts[2]
    return "-"


def create_app(root: Path, *, kv: KeyValueStorePort | None = None) -> FastAPI:
    settings = load_settings()
    setup_logging(settings)

    app = FastAPI(title="Spendio API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.ctx = build_context(root, kv=kv)

    logger = get_logger()

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        request_id = (
            str(request.headers.get("x-request-id", "") or "").strip()
            or uuid4().hex[:16]
        )
        token = set_request_id(request_id)
        started = perf_counter()
        req_logger = logger.bind(
            request_id=request_id,
            store=_store_scope(request.url.path),
            method=request.method,
            path=request.url.path,
        )
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (perf_counter() - started) * 1000
            req_logger.bind(status_code=500).opt(exception=True).error(
                f"request failed duration_ms={duration_ms:.2f}"
            )
            reset_request_id(token)
            raise

        duration_ms = (perf_counter() - started) * 1000
        response.headers["X-Request-Id"] = request_id
        status_code = int(response.status_code)
        message = f"{request.method} {request.url.path} status={status_code} duration_ms={duration_ms:.2f}"
        if status_code >= 500:
            req_logger.bind(status_code=status_code).error(message)
        elif status_code >= 400:
            req_logger.bind(status_code=status_code).warning(message)
        else:
            req_logger.bind(status_code=status_code).info(message)
        reset_request_id(token)
        return response

    register_error_handlers(app)

    for router in (
        health_router,
        entries_router,
        transfers_router,
        accounts_router,
        categories_router,
        income_categories_router,
        budgets_router,
        analytics_router,
        backup_router,
        settings_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    @app.api_route(f"{API_PREFIX}/{{rest:path}}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
    async def api_not_found(rest: str) -> Response:
        raise HTTPException(status_code=404, detail=f"route not found: {API_PREFIX}/{rest}")

    return app


def serve(root: Path, host: str = "127.0.0.1", port: int = 8000) -> None:
    settings: Settings = load_settings()
    setup_logging(settings)
    app = create_app(root)
    get_logger().info(f"serving Spendio API on http://{host}:{port}{API_PREFIX}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


def main() -> None:
    settings = load_settings()
    serve(root=Path.cwd(), host=settings.host, port=settings.port)
