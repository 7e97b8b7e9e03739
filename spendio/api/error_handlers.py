from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from spendio.api.schemas.common import err
from spendio.domain.errors import DomainError
from spendio.logger import current_request_id, get_logger


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_error_handler(_: Request, exc: DomainError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=err(
                request_id=current_request_id(),
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        )

    @app.exception_handler(HTTPException)
    async def _http_error_handler(_: Request, exc: HTTPException) -> JSONResponse:
        code = "http_error"
        if exc.status_code == 404:
            code = "not_found"
        elif exc.status_code == 405:
            code = "method_not_allowed"
        elif exc.status_code == 422:
            code = "validation_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=err(
                request_id=current_request_id(),
                code=code,
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=err(
                request_id=current_request_id(),
                code="validation_error",
                message="request validation failed",
                details=jsonable_errors(exc),
            ),
        )

    @app.exception_handler(ValueError)
    async def _value_error_handler(_: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=err(
                request_id=current_request_id(),
                code="validation_error",
                message=str(exc),
            ),
        )

    @app.exception_handler(Exception)
    async def _generic_error_handler(_: Request, exc: Exception) -> JSONResponse:
        get_logger().opt(exception=exc).error("unhandled error")
        return JSONResponse(
            status_code=500,
            content=err(
                request_id=current_request_id(),
                code="internal_error",
                message="internal server error",
            ),
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # pydantic may attach the raw exception under ctx; keep only printable parts
    return [
        {"loc": list(e.get("loc", ())), "msg": str(e.get("msg", "")), "type": str(e.get("type", ""))}
        for e in exc.errors()
    ]
