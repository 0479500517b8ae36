"""Context binding: evaluate permissions without passing the context every time."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from typing import Any, Generic, TypeVar, overload

from granter._types import CtxT
from granter.explain._models import Explanation
from granter.permission._permission import ErrorOverride, Permission

__all__ = ["Ability", "BoundPermissionSet", "BoundPermissions", "bind_context", "with_ability"]

T = TypeVar("T")

BoundCheck = Callable[..., Awaitable[bool]]


class BoundPermissions(Generic[CtxT]):
    """The generic verbs with the context already applied.

    Nothing is cached: every call evaluates the permission again.

    Example::

        perms = bind_context(ctx)
        if await perms.can(can_edit_post, post):
            ...
        await perms.authorize(is_admin)
        visible = await perms.filter(can_view_post, posts)
    """

    __slots__ = ("_ctx",)

    def __init__(self, ctx: CtxT) -> None:
        self._ctx = ctx

    @property
    def context(self) -> CtxT:
        return self._ctx

    async def can(self, permission: Permission[CtxT, Any], resource: Any = None) -> bool:
        return await permission(self._ctx, resource)

    async def authorize(
        self,
        permission: Permission[CtxT, Any],
        resource: Any = None,
        *,
        error: ErrorOverride = None,
    ) -> None:
        await permission.or_throw(self._ctx, resource, error=error)

    or_throw = authorize

    async def filter(self, permission: Permission[CtxT, Any], resources: Iterable[T]) -> list[T]:
        return await permission.filter(self._ctx, resources)

    async def explain(self, permission: Permission[CtxT, Any], resource: Any = None) -> Explanation:
        return await permission.explain(self._ctx, resource)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._ctx!r})"


class Ability(BoundPermissions[CtxT]):
    """``BoundPermissions`` that also exposes the context's own attributes.

    Example::

        ability = with_ability(ctx)
        ability.user            # ctx.user
        await ability.can(is_admin)
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the bound verbs do not define.
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._ctx, name)


class BoundPermissionSet(Mapping[str, BoundCheck]):
    """A fixed set of named permissions bound to one context.

    Each value is a callable taking the resource (or nothing, for
    resource-less permissions). Values are reachable by key or attribute.
    Names that would shadow a mapping method (``get``, ``keys``, ...) are
    rejected.

    Example::

        abilities = bind_context(ctx, {"is_admin": is_admin, "can_edit_post": can_edit_post})
        await abilities.is_admin()
        await abilities["can_edit_post"](post)
    """

    __slots__ = ("_bound", "_ctx")

    def __init__(self, ctx: Any, permissions: Mapping[str, Permission[Any, Any]]) -> None:
        bound: dict[str, BoundCheck] = {}
        for key, permission in permissions.items():
            if not isinstance(permission, Permission):
                raise TypeError(
                    f"bind_context expects Permission values, got "
                    f"{type(permission).__name__} for {key!r}"
                )
            if not key.startswith("_") and hasattr(BoundPermissionSet, key):
                raise ValueError(
                    f"Permission name {key!r} shadows a mapping method; choose another name"
                )
            bound[key] = functools.partial(permission, ctx)
        self._ctx = ctx
        self._bound = bound

    def __getitem__(self, key: str) -> BoundCheck:
        return self._bound[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bound)

    def __len__(self) -> int:
        return len(self._bound)

    def __getattr__(self, name: str) -> BoundCheck:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._bound[name]
        except KeyError:
            raise AttributeError(f"No permission named {name!r} is bound") from None

    def __repr__(self) -> str:
        return f"BoundPermissionSet({sorted(self._bound)!r})"


@overload
def bind_context(ctx: CtxT) -> BoundPermissions[CtxT]: ...


@overload
def bind_context(ctx: Any, permissions: Mapping[str, Permission[Any, Any]]) -> BoundPermissionSet: ...


def bind_context(
    ctx: Any,
    permissions: Mapping[str, Permission[Any, Any]] | None = None,
) -> BoundPermissions[Any] | BoundPermissionSet:
    """Bind *ctx* so it no longer has to be passed on every check.

    Without *permissions*, returns the generic ``can``/``authorize``/``filter``
    verbs. With a mapping of names to permissions, returns those permissions
    as ``(resource=None)`` callables.

    Example::

        perms = bind_context(ctx)
        await perms.can(is_admin)

        abilities = bind_context(ctx, {"can_edit_post": can_edit_post})
        await abilities.can_edit_post(post)
    """
    if permissions is None:
        return BoundPermissions(ctx)
    return BoundPermissionSet(ctx, permissions)


def with_ability(ctx: CtxT) -> Ability[CtxT]:
    """Bind *ctx* and keep its attributes reachable on the result."""
    return Ability(ctx)
