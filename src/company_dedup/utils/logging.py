"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from time import perf_counter
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from ..config.settings import Settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[run_id]}</cyan> | "
    "<magenta>{extra[module]}</magenta> | "
    "{message} | {extra}"
)


def configure_logging(
    settings: Settings | None = None,
    level: str | None = None,
    *,
    run_id: str = "-",
) -> None:
    """Initialise loguru sinks according to the active settings."""

    if settings is None:
        # Deferred: config.policies imports utils.helpers.
        from ..config.settings import get_settings

        settings = get_settings()
    cfg = settings
    effective_level = (level or cfg.logging.level).upper()

    logger.remove()
    logger.configure(extra={"run_id": run_id, "module": "-"})
    logger.add(
        sys.stderr,
        level=effective_level,
        backtrace=False,
        diagnose=False,
        format=_LOG_FORMAT,
    )
    if cfg.logging.log_to_file:
        log_path = cfg.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            format=_LOG_FORMAT,
            level=effective_level,
        )


def get_logger(**context: Any):
    """Return a contextualised logger instance."""

    return logger.bind(**context)


@contextmanager
def logging_context(**context: Any):
    """Context manager that temporarily binds structured context fields."""

    with logger.contextualize(**context):
        yield logger


@contextmanager
def log_timing(step: str, *, logger_=logger):
    """Helper to log elapsed time for a block."""

    start = perf_counter()
    try:
        yield
    finally:
        elapsed = perf_counter() - start
        logger_.info("Step timing", step=step, seconds=elapsed)


__all__ = ["configure_logging", "get_logger", "logging_context", "log_timing"]
