"""Logical operators that combine permissions into composite permissions."""

from __future__ import annotations

import asyncio
from typing import Any

from granter._types import unify_requirements
from granter.explain._trace import Trace
from granter.permission._permission import Permission, Strategy

__all__ = ["and_", "and_parallel", "not_", "or_", "or_parallel"]

Children = tuple[Permission[Any, Any], ...]


# ---------------------------------------------------------------------------
# Evaluation strategies
# ---------------------------------------------------------------------------


async def _all_sequential(
    children: Children, ctx: Any, resource: Any, trace: Trace | None
) -> bool:
    # Child k+1 is never started before child k resolves.
    for child in children:
        if not await child.evaluate(ctx, resource, trace):
            return False
    return True


async def _any_sequential(
    children: Children, ctx: Any, resource: Any, trace: Trace | None
) -> bool:
    for child in children:
        if await child.evaluate(ctx, resource, trace):
            return True
    return False


async def _gather(children: Children, ctx: Any, resource: Any, trace: Trace | None) -> list[bool]:
    """Start every child before awaiting any of them.

    Each child records into its own trace so the merged details follow
    child order rather than completion order.
    """
    if trace is None:
        return list(await asyncio.gather(*(c.evaluate(ctx, resource) for c in children)))
    child_traces = [Trace() for _ in children]
    results = await asyncio.gather(
        *(c.evaluate(ctx, resource, t) for c, t in zip(children, child_traces))
    )
    for child_trace in child_traces:
        trace.extend(child_trace)
    return list(results)


async def _all_parallel(children: Children, ctx: Any, resource: Any, trace: Trace | None) -> bool:
    return all(await _gather(children, ctx, resource, trace))


async def _any_parallel(children: Children, ctx: Any, resource: Any, trace: Trace | None) -> bool:
    return any(await _gather(children, ctx, resource, trace))


async def _negate(children: Children, ctx: Any, resource: Any, trace: Trace | None) -> bool:
    return not await children[0].evaluate(ctx, resource, trace)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def _validate(operator: str, permissions: tuple[Any, ...]) -> Children:
    if not permissions:
        raise ValueError(f"{operator} needs at least one permission")
    for p in permissions:
        if not isinstance(p, Permission):
            raise TypeError(f"{operator} expects Permission arguments, got {type(p).__name__}")
    return permissions


def _combine(keyword: str, strategy: Strategy, permissions: tuple[Any, ...]) -> Permission[Any, Any]:
    children = _validate(keyword, permissions)
    names = [p.name for p in children]
    requirement = unify_requirements([p.requirement for p in children], names)
    return Permission._composite(
        f"({f' {keyword} '.join(names)})",
        keyword,
        children,
        strategy,
        requirement,
    )


def and_(*permissions: Permission[Any, Any]) -> Permission[Any, Any]:
    """True only if every permission allows access.

    Children run one at a time, in order, and evaluation stops at the first
    denial. Put the cheapest checks first.

    Resource-less permissions mix freely with resource-bound ones; the
    composite requires a resource if any child does. Children requiring
    unrelated resource types are rejected.

    Raises:
        ValueError: No permissions were given.
        TypeError: An argument is not a ``Permission``.
        IncompatibleResourceError: Children require unrelated resource types.

    Example::

        can_publish = and_(is_authenticated, is_post_owner, has_verified_email)
        # name: "(isAuthenticated AND isPostOwner AND hasVerifiedEmail)"
    """
    return _combine("AND", _all_sequential, permissions)


def or_(*permissions: Permission[Any, Any]) -> Permission[Any, Any]:
    """True if any permission allows access.

    Children run one at a time, in order, and evaluation stops at the first
    permission that allows access.

    Example::

        can_edit = or_(is_post_owner, is_admin)
        # name: "(isPostOwner OR isAdmin)"
    """
    return _combine("OR", _any_sequential, permissions)


def and_parallel(*permissions: Permission[Any, Any]) -> Permission[Any, Any]:
    """Like :func:`and_`, but every child is started concurrently.

    There is no short-circuit: all children run to completion even when an
    early one denies. Lookups issued in the same tick can then be coalesced
    by a batching loader shared through the context.

    Example::

        can_edit = and_parallel(is_authenticated, is_post_owner, is_not_banned)
    """
    return _combine("AND", _all_parallel, permissions)


def or_parallel(*permissions: Permission[Any, Any]) -> Permission[Any, Any]:
    """Like :func:`or_`, but every child is started concurrently.

    Example::

        can_edit = or_parallel(is_post_owner, is_admin, is_moderator)
    """
    return _combine("OR", _any_parallel, permissions)


def not_(permission: Permission[Any, Any]) -> Permission[Any, Any]:
    """Invert a permission.

    The child is always evaluated in full.

    Example::

        can_comment = and_(is_authenticated, not_(is_banned))
        # name: "(isAuthenticated AND NOT isBanned)"
    """
    (child,) = _validate("NOT", (permission,))
    return Permission._composite(
        f"NOT {child.name}",
        "NOT",
        (child,),
        _negate,
        child.requirement,
    )
