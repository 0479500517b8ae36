"""Permission units: named, awaitable boolean checks over (context, resource)."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Generic, overload

from granter._audit import log_decision, log_denial, log_explanation
from granter._timing import elapsed_ms, now
from granter._types import (
    Check,
    CtxT,
    RequiresResource,
    ResourceRequirement,
    ResT,
    accepts_resource,
    infer_requirement,
)
from granter.config._config import get_global_config
from granter.exceptions import ForbiddenError
from granter.explain._models import Explanation
from granter.explain._trace import Trace

__all__ = ["ErrorOverride", "Permission", "Strategy", "permission"]

ErrorOverride = str | BaseException | Callable[[], BaseException] | None


def _resolve_error(name: str, error: ErrorOverride) -> BaseException:
    if error is None:
        template = get_global_config().forbidden_message
        return ForbiddenError(template.format(name=name), permission=name)
    if isinstance(error, str):
        return ForbiddenError(error, permission=name)
    if isinstance(error, BaseException):
        return error
    if callable(error):
        return error()
    raise TypeError(
        f"error must be a message, an exception or a factory, got {type(error).__name__}"
    )


class Permission(Generic[CtxT, ResT]):
    """A named authorization check that evaluates to ``bool``.

    Wraps a sync or async ``check(ctx)`` / ``check(ctx, resource)`` callable.
    Calling the permission always returns a coroutine, so composites never
    distinguish sync from async children. Supports ``&`` (AND), ``|`` (OR)
    and ``~`` (NOT) composition.

    Instances are immutable. Composites reference their children without
    copying them, so one permission can be shared by many composites.

    Example::

        is_admin = Permission("isAdmin", lambda ctx: ctx.user.role == "admin")
        is_owner = Permission("isOwner", lambda ctx, post: post.author_id == ctx.user.id)

        can_edit = is_owner | is_admin
        allowed = await can_edit(ctx, post)
    """

    __slots__ = (
        "_accepts_resource",
        "_check",
        "_children",
        "_name",
        "_operator",
        "_requirement",
        "_strategy",
    )

    def __init__(
        self,
        name: str,
        check: Check,
        *,
        resource_type: type | None = None,
    ) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Permission name must be a non-empty string, got {name!r}")
        if not callable(check):
            raise TypeError(f"Permission check must be callable, got {type(check).__name__}")
        accepts = accepts_resource(check)
        if resource_type is not None and not accepts:
            raise TypeError(
                f"Permission {name!r} declares resource_type={resource_type.__name__} "
                f"but its check only takes the context"
            )
        self._name = name
        self._check = check
        self._children: tuple[Permission[Any, Any], ...] = ()
        self._operator: str | None = None
        self._strategy: Strategy | None = None
        self._requirement = infer_requirement(check, resource_type)
        self._accepts_resource = accepts

    @classmethod
    def _composite(
        cls,
        name: str,
        operator: str,
        children: tuple[Permission[Any, Any], ...],
        strategy: Strategy,
        requirement: ResourceRequirement,
    ) -> Permission[Any, Any]:
        """Build an operator-produced permission. Used by the operators only."""
        unit: Permission[Any, Any] = cls.__new__(cls)
        unit._name = name
        unit._children = children
        unit._operator = operator
        unit._strategy = strategy
        unit._requirement = requirement
        unit._accepts_resource = True
        unit._check = unit._composite_check
        return unit

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        """Diagnostic name; composites derive theirs from their children."""
        return self._name

    @property
    def check(self) -> Check:
        """The underlying check. For composites, an async ``(ctx, resource=None)``."""
        return self._check

    @property
    def children(self) -> tuple[Permission[Any, Any], ...]:
        """Child permissions, in evaluation order. Empty for leaves."""
        return self._children

    @property
    def operator(self) -> str | None:
        return self._operator

    @property
    def requirement(self) -> ResourceRequirement:
        return self._requirement

    @property
    def requires_resource(self) -> bool:
        return isinstance(self._requirement, RequiresResource)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    async def _composite_check(self, ctx: Any, resource: Any = None) -> bool:
        return await self._run(ctx, resource, None)

    async def _run(self, ctx: Any, resource: Any, trace: Trace | None) -> bool:
        if self._strategy is not None:
            return await self._strategy(self._children, ctx, resource, trace)
        if self._accepts_resource:
            outcome = self._check(ctx, resource)
        else:
            outcome = self._check(ctx)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return bool(outcome)

    async def evaluate(self, ctx: Any, resource: Any = None, trace: Trace | None = None) -> bool:
        """Evaluate without arity checks or decision logging.

        This is the hook operators use for their children. When *trace* is
        given, one ``Explanation`` node for this permission is recorded on
        it, with the nodes of any evaluated children nested inside.
        """
        if trace is None:
            return await self._run(ctx, resource, None)
        start = now()
        inner = Trace()
        result = await self._run(ctx, resource, inner)
        trace.record(
            Explanation(
                name=self._name,
                result=result,
                duration=elapsed_ms(start, get_global_config().duration_precision),
                operator=self._operator,
                details=inner.nodes,
            )
        )
        return result

    def _require_resource(self, resource: Any) -> None:
        if resource is None and self.requires_resource:
            raise TypeError(f"Permission {self._name!r} requires a resource")

    async def __call__(self, ctx: CtxT, resource: ResT | None = None) -> bool:
        """Evaluate against *ctx* (and *resource*, when the check needs one).

        Resource-less permissions ignore a supplied resource.

        Raises:
            TypeError: The permission needs a resource and none was given.
        """
        self._require_resource(resource)
        result = await self.evaluate(ctx, resource)
        log_decision(self._name, result)
        return result

    async def or_throw(
        self,
        ctx: CtxT,
        resource: ResT | None = None,
        *,
        error: ErrorOverride = None,
    ) -> None:
        """Evaluate and raise when access is denied.

        Args:
            ctx: The evaluation context.
            resource: The resource, if the permission needs one.
            error: Override for the raised error: a message (wrapped in
                ``ForbiddenError``), an exception instance (raised as-is),
                or a zero-argument factory returning the exception.

        Raises:
            ForbiddenError: Access denied and no override was given.

        Example::

            await can_delete_post.or_throw(ctx, post)
            await is_admin.or_throw(ctx, error="Admins only")
        """
        if await self(ctx, resource):
            return
        exc = _resolve_error(self._name, error)
        log_denial(self._name, exc)
        raise exc

    async def filter(self, ctx: CtxT, resources: Iterable[ResT]) -> list[ResT]:
        """Return the resources this permission allows, in their original order.

        Every candidate is evaluated concurrently, so a batching loader in
        the context can coalesce the lookups.

        Example::

            editable = await can_edit_post.filter(ctx, posts)
        """
        candidates = list(resources)
        if not candidates:
            return []
        results = await asyncio.gather(*(self(ctx, candidate) for candidate in candidates))
        return [candidate for candidate, allowed in zip(candidates, results) if allowed]

    async def explain(self, ctx: CtxT, resource: ResT | None = None) -> Explanation:
        """Evaluate while recording which checks ran and what they returned.

        Evaluation order, short-circuiting and parallelism are exactly those
        of a plain call.

        Example::

            explanation = await can_edit.explain(ctx, post)
            print(explanation)
            # (isOwner OR isAdmin) [ALLOWED] (0.05ms)
            #   isOwner [ALLOWED] (0.01ms)
        """
        self._require_resource(resource)
        trace = Trace()
        await self.evaluate(ctx, resource, trace)
        explanation = trace.nodes[0]
        log_decision(self._name, explanation.result)
        log_explanation(explanation)
        return explanation

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def __and__(self, other: object) -> Permission[Any, Any]:
        if not isinstance(other, Permission):
            return NotImplemented
        from granter.permission._operators import and_

        return and_(self, other)

    def __or__(self, other: object) -> Permission[Any, Any]:
        if not isinstance(other, Permission):
            return NotImplemented
        from granter.permission._operators import or_

        return or_(self, other)

    def __invert__(self) -> Permission[Any, Any]:
        from granter.permission._operators import not_

        return not_(self)

    def __repr__(self) -> str:
        return f"Permission({self._name!r})"


# Signature shared by every operator's evaluation strategy:
# (children, ctx, resource, trace) -> bool
Strategy = Callable[
    [tuple[Permission[Any, Any], ...], Any, Any, Trace | None],
    Awaitable[bool],
]


@overload
def permission(name: Callable[..., Any], /) -> Permission[Any, Any]: ...


@overload
def permission(
    name: str | None = None,
    check: None = None,
    *,
    resource_type: type | None = None,
) -> Callable[[Check], Permission[Any, Any]]: ...


@overload
def permission(
    name: str,
    check: Check,
    *,
    resource_type: type | None = None,
) -> Permission[Any, Any]: ...


def permission(
    name: Any = None,
    check: Check | None = None,
    *,
    resource_type: type | None = None,
) -> Any:
    """Create a permission, directly or as a decorator.

    Args:
        name: Diagnostic name. Defaults to the function name in the
            decorator forms.
        check: ``(ctx) -> bool`` or ``(ctx, resource) -> bool``, sync or async.
        resource_type: Resource class the check expects. When omitted the
            requirement is inferred from the check's positional parameters.

    Example::

        is_admin = permission("isAdmin", lambda ctx: ctx.user.role == "admin")

        @permission
        async def is_verified(ctx: AppContext) -> bool:
            return await ctx.users.is_verified(ctx.user.id)

        @permission("isPostOwner", resource_type=Post)
        def is_post_owner(ctx: AppContext, post: Post) -> bool:
            return post.author_id == ctx.user.id
    """
    if callable(name) and check is None:
        return Permission(name.__name__, name, resource_type=resource_type)

    if check is None:

        def decorator(fn: Check) -> Permission[Any, Any]:
            return Permission(name or fn.__name__, fn, resource_type=resource_type)

        return decorator

    return Permission(name, check, resource_type=resource_type)
