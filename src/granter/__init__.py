"""granter — composable async authorization checks.

Define named permission checks over a context and an optional resource,
combine them with AND / OR / NOT, and evaluate, enforce, filter or explain
them.

Example::

    from granter import and_, not_, or_, permission

    is_admin = permission("isAdmin", lambda ctx: ctx.user.role == "admin")
    is_owner = permission("isOwner", lambda ctx, post: post.author_id == ctx.user.id)
    is_locked = permission("isLocked", lambda ctx, post: post.locked)

    can_edit = and_(not_(is_locked), or_(is_owner, is_admin))

    if await can_edit(ctx, post):
        ...
    await can_edit.or_throw(ctx, post)          # raises ForbiddenError
    editable = await can_edit.filter(ctx, posts)
    print(await can_edit.explain(ctx, post))
"""

from importlib.metadata import PackageNotFoundError, version

from granter._checks import authorize, can, filter_allowed
from granter.binding._bound import (
    Ability,
    BoundPermissions,
    BoundPermissionSet,
    bind_context,
    with_ability,
)
from granter.config._config import GranterConfig, configure
from granter.exceptions import (
    ForbiddenError,
    IncompatibleResourceError,
    PermissionError,
    UnauthorizedError,
)
from granter.explain._models import Explanation
from granter.permission._builtins import always_allow, always_deny
from granter.permission._operators import and_, and_parallel, not_, or_, or_parallel
from granter.permission._permission import Permission, permission

try:
    __version__ = version("granter")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "Ability",
    "BoundPermissionSet",
    "BoundPermissions",
    "Explanation",
    "ForbiddenError",
    "GranterConfig",
    "IncompatibleResourceError",
    "Permission",
    "PermissionError",
    "UnauthorizedError",
    "always_allow",
    "always_deny",
    "and_",
    "and_parallel",
    "authorize",
    "bind_context",
    "can",
    "configure",
    "filter_allowed",
    "not_",
    "or_",
    "or_parallel",
    "permission",
    "with_ability",
]
