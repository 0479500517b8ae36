"""Shared test fixtures for granter tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import pytest

from granter import permission
from granter.config._config import _reset_global_config
from granter.testing import MockContext, MockUser

# ---------------------------------------------------------------------------
# Test resources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Post:
    id: int
    author_id: str
    title: str = ""
    published: bool = False
    locked: bool = False


@dataclass(frozen=True)
class HistoricalPost(Post):
    archived_at: str = "2020-01-01"


@dataclass(frozen=True)
class Comment:
    id: int
    author_id: str
    post_id: int


def ctx_for(user_id: str = "1", role: str = "user", **flags: Any) -> MockContext:
    """Build a context for a user with the given id/role and MockUser flags."""
    return MockContext(user=MockUser(id=user_id, role=role, **flags))


# ---------------------------------------------------------------------------
# Permissions shared across tests
# ---------------------------------------------------------------------------

is_authenticated = permission("isAuthenticated", lambda ctx: ctx.user is not None)
is_admin = permission("isAdmin", lambda ctx: ctx.user is not None and ctx.user.role == "admin")
is_user = permission("isUser", lambda ctx: ctx.user is not None and ctx.user.role == "user")
is_moderator = permission(
    "isModerator", lambda ctx: ctx.user is not None and ctx.user.role == "moderator"
)
is_banned = permission("isBanned", lambda ctx: ctx.user is not None and ctx.user.is_banned)
is_owner = permission(
    "isOwner",
    lambda ctx, post: ctx.user is not None and post.author_id == ctx.user.id,
    resource_type=Post,
)
is_published = permission("isPublished", lambda ctx, post: post.published, resource_type=Post)
is_locked = permission("isLocked", lambda ctx, post: post.locked, resource_type=Post)
is_comment_owner = permission(
    "isCommentOwner",
    lambda ctx, comment: ctx.user is not None and comment.author_id == ctx.user.id,
    resource_type=Comment,
)


# ---------------------------------------------------------------------------
# Batching loader (DataLoader-style)
# ---------------------------------------------------------------------------


class BatchingLoader:
    """Coalesces keys requested within one event-loop tick into a single fetch.

    The first ``load`` of a tick schedules a dispatch with ``call_soon``;
    every ``load`` issued before that callback runs joins the same batch.
    """

    def __init__(self, fetch: Callable[[list[Any]], dict[Any, Any]]) -> None:
        self._fetch = fetch
        self._pending: dict[Any, asyncio.Future[Any]] = {}
        self.batches: list[list[Any]] = []

    async def load(self, key: Any) -> Any:
        loop = asyncio.get_running_loop()
        if not self._pending:
            loop.call_soon(self._dispatch)
        future = self._pending.get(key)
        if future is None:
            future = loop.create_future()
            self._pending[key] = future
        return await future

    def _dispatch(self) -> None:
        pending, self._pending = self._pending, {}
        keys = list(pending)
        self.batches.append(keys)
        values = self._fetch(keys)
        for key, future in pending.items():
            future.set_result(values.get(key))


def role_fetcher(roles: dict[str, Iterable[str]]) -> Callable[[list[Any]], dict[Any, Any]]:
    """Fetch function mapping ``(user_id, role)`` keys to membership booleans."""

    def fetch(keys: list[Any]) -> dict[Any, Any]:
        return {key: key[1] in set(roles.get(key[0], ())) for key in keys}

    return fetch


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_config():
    """Every test starts and ends with the default global configuration."""
    _reset_global_config()
    yield
    _reset_global_config()


@pytest.fixture()
def user_ctx() -> MockContext:
    return ctx_for("1", "user")


@pytest.fixture()
def admin_ctx() -> MockContext:
    return ctx_for("99", "admin")


@pytest.fixture()
def own_post() -> Post:
    return Post(id=1, author_id="1", title="Mine", published=True)


@pytest.fixture()
def other_post() -> Post:
    return Post(id=2, author_id="2", title="Theirs")
