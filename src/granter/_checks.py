"""Point checks: can(), authorize() and filter_allowed() as free functions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from granter.permission._permission import ErrorOverride, Permission

__all__ = ["authorize", "can", "filter_allowed"]

T = TypeVar("T")


async def can(ctx: Any, permission: Permission[Any, Any], resource: Any = None) -> bool:
    """Check whether *permission* allows access.

    Equivalent to ``await permission(ctx, resource)``.

    Args:
        ctx: The evaluation context (principal, data handles, ...).
        permission: The permission to evaluate.
        resource: The resource, if the permission needs one.

    Returns:
        ``True`` if access is granted, ``False`` if denied.

    Example::

        if await can(ctx, can_edit_post, post):
            ...
    """
    return await permission(ctx, resource)


async def authorize(
    ctx: Any,
    permission: Permission[Any, Any],
    resource: Any = None,
    *,
    error: ErrorOverride = None,
) -> None:
    """Assert that *permission* allows access.

    Raises :class:`~granter.exceptions.ForbiddenError` (or *error*) when
    access is denied. Returns ``None`` on success.

    Args:
        ctx: The evaluation context.
        permission: The permission to evaluate.
        resource: The resource, if the permission needs one.
        error: Optional override; see :meth:`Permission.or_throw`.

    Raises:
        ForbiddenError: If access is denied and no override is given.

    Example::

        await authorize(ctx, can_delete_post, post)  # raises if denied
    """
    await permission.or_throw(ctx, resource, error=error)


async def filter_allowed(
    ctx: Any,
    permission: Permission[Any, Any],
    resources: Iterable[T],
) -> list[T]:
    """Keep only the resources *permission* allows, preserving order.

    Example::

        editable = await filter_allowed(ctx, can_edit_post, posts)
    """
    return await permission.filter(ctx, resources)
