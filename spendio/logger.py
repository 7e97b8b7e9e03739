from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from functools import lru_cache
from pathlib import Path
from typing import cast

from loguru import logger as loguru_logger

from .settings import Settings, load_settings

_REQUEST_ID: ContextVar[str] = ContextVar("spendio_request_id", default="-")
_LOGGING_CONFIGURED = False


def current_request_id() -> str:
    request_id = str(_REQUEST_ID.get() or "").strip()
    return request_id or "-"


def set_request_id(request_id: str) -> Token[str]:
    value = str(request_id or "").strip() or "-"
    return _REQUEST_ID.set(value)


def reset_request_id(token: Token[str]) -> None:
    _REQUEST_ID.reset(token)


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            target_level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            target_level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(target_level, record.getMessage())


def _patch_record(record: dict[str, object]) -> None:
    extra = cast(dict[str, object], record["extra"])
    store = str(extra.get("store", "-") or "-").strip() or "-"
    request_id = str(extra.get("request_id", "") or "").strip() or current_request_id()
    extra["store"] = store
    extra["request_id"] = request_id


def setup_logging(settings: Settings | None = None) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    config = settings or load_settings()

    loguru_logger.remove()
    loguru_logger.configure(patcher=_patch_record)
    format_text = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "rid=<yellow>{extra[request_id]}</yellow> "
        "store=<cyan>{extra[store]}</cyan> | "
        "{message}"
    )
    loguru_logger.add(
        sys.stdout,
        level=config.log_level,
        format=format_text,
        colorize=not config.log_json,
        serialize=config.log_json,
        backtrace=True,
        diagnose=False,
    )

    if config.log_path:
        path = Path(config.log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        loguru_logger.add(
            str(path),
            level=config.log_level,
            serialize=True,
            enqueue=True,
            backtrace=True,
            diagnose=False,
            rotation=f"{config.log_rotation_mb} MB",
            retention=f"{config.log_retention_days} days",
            compression="gz",
        )

    intercept = _InterceptHandler()
    root_logger = logging.getLogger()
    root_logger.handlers = [intercept]
    root_logger.setLevel(config.log_level)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "starlette", "sqlalchemy"):
        logger_obj = logging.getLogger(name)
        logger_obj.handlers = [intercept]
        logger_obj.propagate = False

    _LOGGING_CONFIGURED = True


@lru_cache(maxsize=1)
def get_logger():
    setup_logging(load_settings())
    return loguru_logger.bind(store="-")
