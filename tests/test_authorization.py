"""Unit tests for vehiclevault.core.authorization: route guard, role gate, deletion guards."""

import unittest

from vehiclevault.core.authorization import (
    ADMIN_ACTIONS,
    Action,
    authorize,
    can_delete_user,
    check_user_deletion,
    check_user_demotion,
    profile_allows,
    require_profile,
)
from vehiclevault.core.errors import AccessDeniedError, AuthorizationRefusedError, NotAuthenticatedError
from vehiclevault.schemas.auth import Profile, SessionPrincipal

ADMIN = SessionPrincipal(id="u1", full_name="Ada Admin", email="ada@x.com", profile=Profile.ADMIN)
TECH = SessionPrincipal(id="u2", full_name="Tom Tech", email="tom@x.com", profile=Profile.TECHNICIAN)


class TestRouteGuard(unittest.TestCase):
    def test_unauthenticated_refused_for_every_action(self) -> None:
        for action in Action:
            with self.assertRaises(NotAuthenticatedError):
                authorize(None, action)


class TestRoleGate(unittest.TestCase):
    def test_technician_refused_every_admin_action(self) -> None:
        for action in ADMIN_ACTIONS:
            with self.assertRaises(AccessDeniedError):
                authorize(TECH, action)

    def test_technician_allowed_non_admin_actions(self) -> None:
        for action in set(Action) - ADMIN_ACTIONS:
            self.assertEqual(authorize(TECH, action), TECH)

    def test_admin_allowed_everything(self) -> None:
        for action in Action:
            self.assertTrue(profile_allows(Profile.ADMIN, action))
            self.assertEqual(authorize(ADMIN, action), ADMIN)

    def test_require_profile(self) -> None:
        self.assertEqual(require_profile(ADMIN, Profile.ADMIN), ADMIN)
        with self.assertRaises(AccessDeniedError):
            require_profile(TECH, Profile.ADMIN)


class TestDeletionGuards(unittest.TestCase):
    def test_cannot_delete_self(self) -> None:
        for user_id in ("u1", "abc", ""):
            self.assertFalse(can_delete_user(user_id, user_id))
        self.assertTrue(can_delete_user("u1", "u2"))

    def test_self_delete_refused(self) -> None:
        with self.assertRaises(AuthorizationRefusedError):
            check_user_deletion(ADMIN, "u1", False, True, 5)

    def test_protected_refused_regardless_of_actor(self) -> None:
        with self.assertRaises(AuthorizationRefusedError):
            check_user_deletion(ADMIN, "u9", True, False, 0)

    def test_last_admin_refused(self) -> None:
        with self.assertRaises(AuthorizationRefusedError):
            check_user_deletion(ADMIN, "u9", False, True, 1)

    def test_allowed(self) -> None:
        check_user_deletion(ADMIN, "u9", False, True, 2)
        check_user_deletion(ADMIN, "u9", False, False, 1)


class TestDemotionGuards(unittest.TestCase):
    def test_protected_refused(self) -> None:
        with self.assertRaises(AuthorizationRefusedError):
            check_user_demotion(True, True, 5)

    def test_last_admin_refused(self) -> None:
        with self.assertRaises(AuthorizationRefusedError):
            check_user_demotion(False, True, 1)

    def test_allowed(self) -> None:
        check_user_demotion(False, True, 2)
        check_user_demotion(False, False, 0)


if __name__ == "__main__":
    unittest.main()
