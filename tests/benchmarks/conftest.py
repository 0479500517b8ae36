"""Benchmark fixtures — contexts, resources and permission trees of varying size."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from granter import Permission, and_, not_, or_, or_parallel, permission

# ---------------------------------------------------------------------------
# Benchmark-local context and resources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchUser:
    id: int
    role: str = "member"


@dataclass(frozen=True)
class BenchContext:
    user: BenchUser


@dataclass(frozen=True)
class BenchPost:
    id: int
    author_id: int
    is_published: bool = False
    locked: bool = False


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------

is_admin = permission("isAdmin", lambda ctx: ctx.user.role == "admin")
is_owner = permission(
    "isOwner", lambda ctx, post: post.author_id == ctx.user.id, resource_type=BenchPost
)
is_published = permission(
    "isPublished", lambda ctx, post: post.is_published, resource_type=BenchPost
)
is_locked = permission("isLocked", lambda ctx, post: post.locked, resource_type=BenchPost)


async def _async_is_member(ctx: BenchContext) -> bool:
    return ctx.user.role in ("member", "admin")


is_member = permission("isMember", _async_is_member)


def make_wide_or(n: int) -> Permission[Any, Any]:
    """An OR of *n* denying leaves followed by one allowing leaf."""
    leaves = [permission(f"deny_{i}", lambda ctx: False) for i in range(n)]
    return or_(*leaves, permission("allow", lambda ctx: True))


def make_deep_not(depth: int) -> Permission[Any, Any]:
    """*depth* nested negations around a single leaf."""
    p: Permission[Any, Any] = is_admin
    for _ in range(depth):
        p = not_(p)
    return p


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def bench_ctx() -> BenchContext:
    return BenchContext(user=BenchUser(id=1))


@pytest.fixture()
def bench_post() -> BenchPost:
    return BenchPost(id=1, author_id=1, is_published=True)


@pytest.fixture(scope="module")
def posts_1k() -> list[BenchPost]:
    return [BenchPost(id=i, author_id=i % 10, is_published=i % 2 == 0) for i in range(1_000)]


@pytest.fixture()
def can_edit() -> Permission[Any, Any]:
    return and_(is_member, not_(is_locked), or_(is_owner, is_admin))


@pytest.fixture()
def can_view() -> Permission[Any, Any]:
    return or_parallel(is_published, is_owner, is_admin)
