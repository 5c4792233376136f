"""Tests for the admin approval gate: approve, reject, suspend, activate, delete."""

import unittest

from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.models import Fabric, User, UsageEntry
from app.services import admin
from app.services.accounts import authenticate
from db_support import TEST_PASSWORD, DatabaseTestCase, make_user


class AdminGateTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = make_user(self.db, email="root@mail.com", username="root", role="admin")


class TestApprove(AdminGateTestCase):
    def test_pending_user_becomes_active_and_can_log_in(self) -> None:
        pending = make_user(self.db, status="pending")
        approved = admin.approve_user(self.db, pending.id, self.admin)
        self.assertEqual(approved.status, "active")
        result = authenticate(self.db, "jane", TEST_PASSWORD, self.settings)
        self.assertEqual(result.user.id, pending.id)

    def test_approving_twice_is_not_found(self) -> None:
        pending = make_user(self.db, status="pending")
        admin.approve_user(self.db, pending.id, self.admin)
        with self.assertRaises(NotFoundError):
            admin.approve_user(self.db, pending.id, self.admin)

    def test_approve_suspended_user_is_not_found(self) -> None:
        suspended = make_user(self.db, status="suspended")
        with self.assertRaises(NotFoundError):
            admin.approve_user(self.db, suspended.id, self.admin)
        self.assertEqual(self.reload(suspended).status, "suspended")

    def test_approve_unknown_id(self) -> None:
        with self.assertRaises(NotFoundError):
            admin.approve_user(self.db, "no-such-id", self.admin)


class TestReject(AdminGateTestCase):
    def test_pending_user_is_deleted(self) -> None:
        pending = make_user(self.db, status="pending")
        admin.reject_user(self.db, pending.id, self.admin)
        self.db.expire_all()
        self.assertIsNone(self.db.get(User, pending.id))

    def test_active_user_is_never_deleted_by_reject(self) -> None:
        active = make_user(self.db)
        with self.assertRaises(NotFoundError):
            admin.reject_user(self.db, active.id, self.admin)
        self.assertIsNotNone(self.reload(active))


class TestSuspendActivate(AdminGateTestCase):
    def test_suspend_then_activate(self) -> None:
        user = make_user(self.db)
        self.assertEqual(admin.suspend_user(self.db, user.id, self.admin).status, "suspended")
        self.assertEqual(admin.activate_user(self.db, user.id, self.admin).status, "active")

    def test_suspend_is_idempotent(self) -> None:
        user = make_user(self.db, status="suspended")
        self.assertEqual(admin.suspend_user(self.db, user.id, self.admin).status, "suspended")

    def test_activate_is_idempotent(self) -> None:
        user = make_user(self.db)
        self.assertEqual(admin.activate_user(self.db, user.id, self.admin).status, "active")

    def test_pending_user_cannot_be_suspended_or_activated(self) -> None:
        pending = make_user(self.db, status="pending")
        with self.assertRaises(ConflictError):
            admin.suspend_user(self.db, pending.id, self.admin)
        with self.assertRaises(ConflictError):
            admin.activate_user(self.db, pending.id, self.admin)
        self.assertEqual(self.reload(pending).status, "pending")

    def test_admin_cannot_suspend_self(self) -> None:
        with self.assertRaises(ForbiddenError):
            admin.suspend_user(self.db, self.admin.id, self.admin)
        self.assertEqual(self.reload(self.admin).status, "active")

    def test_suspension_keeps_lockout_fields(self) -> None:
        user = make_user(self.db, failed_login_attempts=3)
        admin.suspend_user(self.db, user.id, self.admin)
        admin.activate_user(self.db, user.id, self.admin)
        self.assertEqual(self.reload(user).failed_login_attempts, 3)

    def test_unknown_user(self) -> None:
        with self.assertRaises(NotFoundError):
            admin.suspend_user(self.db, "no-such-id", self.admin)


class TestDeleteAndListing(AdminGateTestCase):
    def test_delete_removes_owned_rows(self) -> None:
        user = make_user(self.db)
        fabric = Fabric(user_id=user.id, name="Linen", total_yards=3.0)
        self.db.add(fabric)
        self.db.flush()
        self.db.add(
            UsageEntry(
                fabric_id=fabric.id, user_id=user.id, yards_used=1.0, project_name="Skirt"
            )
        )
        self.db.commit()

        admin.delete_user(self.db, user.id, self.admin)
        self.db.expire_all()
        self.assertIsNone(self.db.get(User, user.id))
        self.assertEqual(self.db.query(Fabric).count(), 0)
        self.assertEqual(self.db.query(UsageEntry).count(), 0)

    def test_admin_cannot_delete_self(self) -> None:
        with self.assertRaises(ForbiddenError):
            admin.delete_user(self.db, self.admin.id, self.admin)
        self.assertIsNotNone(self.reload(self.admin))

    def test_delete_unknown_user(self) -> None:
        with self.assertRaises(NotFoundError):
            admin.delete_user(self.db, "no-such-id", self.admin)

    def test_pending_listing_only_has_pending(self) -> None:
        pending = make_user(self.db, status="pending")
        make_user(self.db, email="bob@mail.com", username="bob")
        self.assertEqual([u.id for u in admin.list_pending_users(self.db)], [pending.id])
        self.assertEqual(len(admin.list_users(self.db)), 3)


if __name__ == "__main__":
    unittest.main()
