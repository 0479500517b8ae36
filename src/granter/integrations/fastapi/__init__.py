"""FastAPI integration for granter."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install granter[fastapi]"
    ) from exc

from granter.integrations.fastapi._dependencies import (
    RequirePermission,
    get_context,
    get_permissions,
)
from granter.integrations.fastapi._errors import install_error_handlers

__all__ = [
    "RequirePermission",
    "get_context",
    "get_permissions",
    "install_error_handlers",
]
