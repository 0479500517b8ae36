"""Permission units and the operators that compose them."""

from granter.permission._builtins import always_allow, always_deny
from granter.permission._operators import and_, and_parallel, not_, or_, or_parallel
from granter.permission._permission import Permission, permission

__all__ = [
    "Permission",
    "always_allow",
    "always_deny",
    "and_",
    "and_parallel",
    "not_",
    "or_",
    "or_parallel",
    "permission",
]
