"""FastAPI dependencies for granter permissions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from granter.binding._bound import BoundPermissions, bind_context
from granter.permission._permission import ErrorOverride, Permission

__all__ = ["RequirePermission", "get_context", "get_permissions"]


# ---------------------------------------------------------------------------
# Sentinel dependency
# ---------------------------------------------------------------------------


def get_context(request: Request) -> Any:
    """Sentinel dependency — override via ``app.dependency_overrides[get_context]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure how the evaluation context is built for a request.

    Example::

        from granter.integrations.fastapi import get_context

        def build_context(request: Request) -> AppContext:
            return AppContext(user=request.state.user, db=request.app.state.db)

        app.dependency_overrides[get_context] = build_context
    """
    raise NotImplementedError(
        "Override get_context via app.dependency_overrides[get_context]. "
        "See granter docs for configuration guide."
    )


def get_permissions(ctx: Any = Depends(get_context)) -> BoundPermissions[Any]:
    """Dependency returning the request context bound to ``can``/``authorize``/``filter``.

    Example::

        @app.get("/posts")
        async def list_posts(
            perms: BoundPermissions = Depends(get_permissions),
        ) -> list[dict]:
            return await perms.filter(can_view_post, await load_posts())
    """
    return bind_context(ctx)


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _make_dependency(
    permission: Permission[Any, Any],
    *,
    error: ErrorOverride = None,
) -> Callable[..., Any]:
    if permission.requires_resource:
        raise TypeError(
            f"RequirePermission needs a resource-less permission; "
            f"{permission.name!r} requires a resource"
        )

    async def _require(ctx: Any = Depends(get_context)) -> None:
        await permission.or_throw(ctx, error=error)

    return _require


def RequirePermission(  # noqa: N802
    permission: Permission[Any, Any],
    *,
    error: ErrorOverride = None,
) -> Any:
    """FastAPI dependency that rejects the request unless *permission* allows it.

    Only resource-less permissions can be required this way; check
    resource-bound permissions inside the route once the resource is loaded.
    Denials raise ``ForbiddenError`` (or *error*), which
    :func:`install_error_handlers` turns into a 403 response.

    Args:
        permission: A resource-less permission.
        error: Optional override; see :meth:`Permission.or_throw`.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.post("/posts", dependencies=[RequirePermission(can_create_post)])
        async def create_post(...) -> dict:
            ...
    """
    return Depends(_make_dependency(permission, error=error))
