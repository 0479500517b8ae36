"""Exception hierarchy for granter."""

from __future__ import annotations

__all__ = [
    "ForbiddenError",
    "IncompatibleResourceError",
    "PermissionError",
    "UnauthorizedError",
]


class PermissionError(Exception):  # noqa: A001
    """Base exception for authorization failures.

    Distinct from the built-in ``PermissionError`` (an ``OSError``); import
    it from ``granter`` explicitly.

    Attributes:
        status_code: HTTP status an integration should map this error to.
    """

    status_code: int = 403

    def __init__(self, message: str = "Permission denied") -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(PermissionError):
    """No authenticated principal is available.

    granter never raises this itself; callers raise it before reaching
    the permission layer, typically when the context has no user.

    Example::

        if ctx.user is None:
            raise UnauthorizedError("Please log in")
    """

    status_code = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(PermissionError):
    """The principal is authenticated but the permission check denied access.

    Attributes:
        permission: Name of the denied permission, when raised by
            ``or_throw``/``authorize``.

    Example::

        try:
            await can_delete_post.or_throw(ctx, post)
        except ForbiddenError as exc:
            print(exc.permission)
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Access forbidden",
        *,
        permission: str | None = None,
    ) -> None:
        self.permission = permission
        super().__init__(message)


class IncompatibleResourceError(TypeError):
    """Children of a composite permission require unrelated resource types.

    Raised when the composite is built, never during evaluation.

    Attributes:
        first: Name of the child that fixed the resource type.
        first_type: The resource type it requires.
        second: Name of the conflicting child.
        second_type: The resource type the conflicting child requires.
    """

    def __init__(
        self,
        *,
        first: str,
        first_type: type,
        second: str,
        second_type: type,
    ) -> None:
        self.first = first
        self.first_type = first_type
        self.second = second
        self.second_type = second_type
        super().__init__(
            f"Cannot combine {first!r} (resource {first_type.__name__}) with "
            f"{second!r} (resource {second_type.__name__})"
        )
