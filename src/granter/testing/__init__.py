"""granter testing utilities — mock contexts, recording permissions, assertions, fixtures.

Provides test helpers for verifying permissions:

- **MockContext / factories**: Lightweight contexts and principals for tests.
- **Recording permissions**: ``recording_permission`` and ``CallLog`` to
  assert evaluation order and short-circuiting.
- **Assertion helpers**: ``assert_allowed``, ``assert_denied``,
  ``assert_evaluated``.
- **Fixtures**: ``granter_config``, ``isolated_granter_config``, ``call_log``.

Example::

    from granter.testing import assert_allowed, make_admin

    async def test_admin_can_edit(post):
        await assert_allowed(can_edit_post, make_admin(), post)
"""

from granter.testing._actors import MockContext, MockUser, make_admin, make_anonymous, make_user
from granter.testing._assertions import assert_allowed, assert_denied, assert_evaluated
from granter.testing._fixtures import call_log, granter_config, isolated_granter_config
from granter.testing._isolation import isolated_config
from granter.testing._recording import CallLog, recording_permission

__all__ = [
    "CallLog",
    "MockContext",
    "MockUser",
    "assert_allowed",
    "assert_denied",
    "assert_evaluated",
    "call_log",
    "granter_config",
    "isolated_config",
    "isolated_granter_config",
    "make_admin",
    "make_anonymous",
    "make_user",
    "recording_permission",
]
