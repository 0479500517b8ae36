"""Audit logging for permission decisions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from granter.config._config import get_global_config

if TYPE_CHECKING:
    from granter.explain._models import Explanation

__all__ = ["log_decision", "log_denial", "log_explanation"]

logger = logging.getLogger("granter")
denied_logger = logging.getLogger("granter.denied")


def log_decision(name: str, allowed: bool) -> None:
    """Log the outcome of a top-level evaluation at INFO.

    Only emits when ``log_decisions`` is enabled in the global config.
    Child evaluations inside composites are never logged individually.
    """
    if not get_global_config().log_decisions:
        return
    logger.info("Permission check: %s -> %s", name, "ALLOWED" if allowed else "DENIED")


def log_explanation(explanation: Explanation) -> None:
    """Log the full explain tree at DEBUG."""
    if not get_global_config().log_decisions:
        return
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Explanation for %s:\n%s", explanation.name, explanation)


def log_denial(name: str, error: BaseException) -> None:
    """Log an ``or_throw`` denial to the ``granter.denied`` sub-logger."""
    if not get_global_config().log_decisions:
        return
    denied_logger.warning("DENIED:%s raised %s: %s", name, type(error).__name__, error)
