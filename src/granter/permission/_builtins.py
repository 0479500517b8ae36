"""Built-in constant permissions."""

from __future__ import annotations

from typing import Any

from granter.permission._permission import Permission

__all__ = ["always_allow", "always_deny"]


def _always_allow(ctx: Any) -> bool:
    return True


def _always_deny(ctx: Any) -> bool:
    return False


always_allow: Permission[Any, Any] = Permission("always_allow", _always_allow)
always_deny: Permission[Any, Any] = Permission("always_deny", _always_deny)
