"""Shared type aliases and the resource requirement variants for granter."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from granter.exceptions import IncompatibleResourceError

__all__ = [
    "NO_RESOURCE",
    "Check",
    "CtxT",
    "NoResource",
    "RequiresResource",
    "ResT",
    "ResourceRequirement",
    "accepts_resource",
    "infer_requirement",
    "unify_requirements",
]

CtxT = TypeVar("CtxT")
ResT = TypeVar("ResT")

# A check may be sync or async; granter awaits whatever it gets back.
Check = Callable[..., bool | Awaitable[bool]]


@dataclass(frozen=True, slots=True)
class NoResource:
    """The permission is evaluated against the context alone."""

    def __repr__(self) -> str:
        return "NO_RESOURCE"


@dataclass(frozen=True, slots=True)
class RequiresResource:
    """The permission needs a resource of ``resource_type``.

    ``object`` stands for "some resource, type unknown" and unifies with
    any concrete type.
    """

    resource_type: type = object

    def __repr__(self) -> str:
        return f"RequiresResource({self.resource_type.__name__})"


ResourceRequirement = NoResource | RequiresResource

NO_RESOURCE = NoResource()

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _positional_params(fn: Callable[..., Any]) -> list[inspect.Parameter] | None:
    """Positional parameters of *fn*, or None if unknown or variadic."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    params: list[inspect.Parameter] = []
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL:
            params.append(param)
    return params


def accepts_resource(check: Check) -> bool:
    """Whether *check* can be called as ``check(ctx, resource)``."""
    params = _positional_params(check)
    return params is None or len(params) >= 2


def infer_requirement(check: Check, resource_type: type | None = None) -> ResourceRequirement:
    """Work out whether *check* needs a resource.

    An explicit *resource_type* always wins. Otherwise a check whose second
    positional parameter has no default is treated as resource-bound, and
    anything else (``(ctx)``, ``(ctx, resource=None)``, ``*args``) as
    resource-less.

    Example::

        infer_requirement(lambda ctx: True)             # NO_RESOURCE
        infer_requirement(lambda ctx, post: True)       # RequiresResource(object)
        infer_requirement(lambda ctx, post: True, Post) # RequiresResource(Post)
    """
    if resource_type is not None:
        return RequiresResource(resource_type)
    params = _positional_params(check)
    if params is not None and len(params) >= 2 and params[1].default is inspect.Parameter.empty:
        return RequiresResource(object)
    return NO_RESOURCE


def unify_requirements(
    requirements: list[ResourceRequirement],
    names: list[str],
) -> ResourceRequirement:
    """Combine the requirements of a composite's children.

    Resource-less children are ignored. ``object`` unifies with anything,
    and related classes unify to the more derived one.

    Raises:
        IncompatibleResourceError: Two children require unrelated types.
    """
    unified: RequiresResource | None = None
    unified_name = ""
    for requirement, name in zip(requirements, names):
        if not isinstance(requirement, RequiresResource):
            continue
        if unified is None or unified.resource_type is object:
            unified, unified_name = requirement, name
            continue
        current = unified.resource_type
        candidate = requirement.resource_type
        if candidate is object or issubclass(current, candidate):
            continue
        if issubclass(candidate, current):
            unified, unified_name = requirement, name
            continue
        raise IncompatibleResourceError(
            first=unified_name,
            first_type=current,
            second=name,
            second_type=candidate,
        )
    return unified if unified is not None else NO_RESOURCE
