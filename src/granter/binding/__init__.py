"""Context binding helpers."""

from granter.binding._bound import (
    Ability,
    BoundPermissions,
    BoundPermissionSet,
    bind_context,
    with_ability,
)

__all__ = ["Ability", "BoundPermissionSet", "BoundPermissions", "bind_context", "with_ability"]
