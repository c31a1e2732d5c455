"""loguru setup with per-request context (correlation id, authenticated account)."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> "
    "<yellow>acct={extra[account_id]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")
_ACCOUNT_ID: ContextVar[str] = ContextVar("account_id", default="-")

_QUIET_LIBRARIES = {"werkzeug": logging.INFO, "httpx": logging.WARNING, "sqlalchemy.engine": logging.WARNING}


def _context() -> dict[str, str]:
    return {"correlation_id": _CORRELATION_ID.get(), "account_id": _ACCOUNT_ID.get()}


class _InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(**_context()).log(
            level, record.getMessage()
        )


class ContextualLogger:
    """Proxy for loguru binding the current request context on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(**_context()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def bind_account(account_id: int | None) -> None:
    _ACCOUNT_ID.set(str(account_id) if account_id is not None else "-")


def clear_request_context() -> None:
    _CORRELATION_ID.set("-")
    _ACCOUNT_ID.set("-")


def _log_file_path() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parents[2] / "instance" / "keystone.log"


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = _log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.configure(extra={"correlation_id": "-", "account_id": "-"}, patcher=sanitize_record)
    _logger.add(sys.stderr, level=level, format=_FMT, colorize=True, backtrace=False, diagnose=False)
    _logger.add(
        str(log_file),
        level=level,
        format=_FMT,
        colorize=False,
        backtrace=False,
        diagnose=False,
        enqueue=True,
        encoding="utf-8",
        rotation="10 MB",
        retention=5,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, lib_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(lib_level)


logger = ContextualLogger()

__all__ = [
    "bind_account",
    "clear_request_context",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
