"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from granter.exceptions import PermissionError

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for granter errors on a FastAPI app.

    Converts permission errors into HTTP responses using each error's
    ``status_code``:

    - ``UnauthorizedError`` -> 401 Unauthorized
    - ``ForbiddenError`` (and any other ``PermissionError``) -> 403 Forbidden

    Args:
        app: The FastAPI application instance.

    Example::

        from fastapi import FastAPI
        from granter.integrations.fastapi import install_error_handlers

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(PermissionError)
    async def permission_error_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: PermissionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc)},
        )
