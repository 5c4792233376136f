"""Tests for fabric CRUD scoping and atomic usage recording."""

import unittest
from unittest.mock import MagicMock, patch

from pydantic import ValidationError

from app.core.database import atomic
from app.core.errors import NotFoundError
from app.models import Fabric, Project, UsageEntry
from app.schemas.fabric import FabricCreate, FabricUpdate, UsageCreate
from app.services import fabrics
from db_support import DatabaseTestCase, make_user


class TestRemainingAfterUsage(unittest.TestCase):
    def test_subtracts(self) -> None:
        self.assertAlmostEqual(fabrics.remaining_after_usage(5.0, 1.5), 3.5)

    def test_clamps_at_zero(self) -> None:
        self.assertEqual(fabrics.remaining_after_usage(2.0, 3.0), 0.0)

    def test_exact_use_leaves_zero(self) -> None:
        self.assertEqual(fabrics.remaining_after_usage(2.0, 2.0), 0.0)


class TestFiniteAmounts(unittest.TestCase):
    def test_usage_rejects_inf_and_nan(self) -> None:
        for value in (float("inf"), float("nan")):
            with self.assertRaises(ValidationError):
                UsageCreate(yards_used=value, project_name="Quilt")

    def test_fabric_rejects_inf_yardage_and_costs(self) -> None:
        with self.assertRaises(ValidationError):
            FabricCreate(name="Silk", total_yards=float("inf"))
        with self.assertRaises(ValidationError):
            FabricUpdate(total_yards=float("inf"))
        with self.assertRaises(ValidationError):
            FabricCreate(name="Silk", total_yards=1.0, total_cost=float("inf"))


class TestAtomic(unittest.TestCase):
    """atomic() commits on success and rolls back (then re-raises) on error."""

    def test_commits_on_success(self) -> None:
        db = MagicMock()
        with atomic(db):
            pass
        db.commit.assert_called_once()
        db.rollback.assert_not_called()

    def test_rolls_back_and_reraises(self) -> None:
        db = MagicMock()
        with self.assertRaises(ValueError):
            with atomic(db):
                raise ValueError("boom")
        db.rollback.assert_called_once()
        db.commit.assert_not_called()

    def test_failed_commit_is_rolled_back(self) -> None:
        db = MagicMock()
        db.commit.side_effect = RuntimeError("db down")
        with self.assertRaises(RuntimeError):
            with atomic(db):
                pass
        db.rollback.assert_called_once()


class FabricTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = make_user(self.db)
        self.other = make_user(self.db, email="bob@mail.com", username="bob")
        self.fabric = fabrics.create_fabric(
            self.db, self.user.id, FabricCreate(name="Blue linen", total_yards=5.0)
        )


class TestRecordUsage(FabricTestCase):
    def test_decrements_and_records(self) -> None:
        entry, left = fabrics.record_usage(
            self.db,
            self.fabric.id,
            self.user.id,
            UsageCreate(yards_used=1.5, project_name="Summer dress"),
        )
        self.assertAlmostEqual(left, 3.5)
        self.db.expire_all()
        self.assertAlmostEqual(self.db.get(Fabric, self.fabric.id).total_yards, 3.5)
        self.assertAlmostEqual(entry.yards_used, 1.5)
        self.assertEqual(entry.project_name, "Summer dress")

    def test_overuse_clamps_stash_but_keeps_requested_amount(self) -> None:
        _, left = fabrics.record_usage(
            self.db,
            self.fabric.id,
            self.user.id,
            UsageCreate(yards_used=7.0, project_name="Quilt"),
        )
        self.assertEqual(left, 0.0)
        self.db.expire_all()
        self.assertEqual(self.db.get(Fabric, self.fabric.id).total_yards, 0.0)

        history = fabrics.usage_history(self.db, self.user.id)
        self.assertEqual(len(history), 1)
        self.assertAlmostEqual(history[0].yards_used, 7.0)
        self.assertEqual(history[0].fabric_name, "Blue linen")

    def test_failed_commit_leaves_fabric_and_history_untouched(self) -> None:
        with patch.object(self.db, "commit", side_effect=RuntimeError("db down")):
            with self.assertRaises(RuntimeError):
                fabrics.record_usage(
                    self.db,
                    self.fabric.id,
                    self.user.id,
                    UsageCreate(yards_used=2.0, project_name="Tote"),
                )
        self.db.expire_all()
        self.assertAlmostEqual(self.db.get(Fabric, self.fabric.id).total_yards, 5.0)
        self.assertEqual(self.db.query(UsageEntry).count(), 0)

    def test_other_users_fabric_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            fabrics.record_usage(
                self.db,
                self.fabric.id,
                self.other.id,
                UsageCreate(yards_used=1.0, project_name="Tote"),
            )
        self.db.expire_all()
        self.assertAlmostEqual(self.db.get(Fabric, self.fabric.id).total_yards, 5.0)

    def test_linked_project_must_belong_to_user(self) -> None:
        foreign = Project(user_id=self.other.id, name="Bob's coat")
        self.db.add(foreign)
        self.db.commit()
        with self.assertRaises(NotFoundError) as ctx:
            fabrics.record_usage(
                self.db,
                self.fabric.id,
                self.user.id,
                UsageCreate(yards_used=1.0, project_name="Coat", project_id=foreign.id),
            )
        self.assertEqual(ctx.exception.message, "Project not found")
        self.assertEqual(self.db.query(UsageEntry).count(), 0)

    def test_linked_project_is_stored(self) -> None:
        project = Project(user_id=self.user.id, name="Coat")
        self.db.add(project)
        self.db.commit()
        entry, _ = fabrics.record_usage(
            self.db,
            self.fabric.id,
            self.user.id,
            UsageCreate(yards_used=1.0, project_name="Coat", project_id=project.id),
        )
        self.assertEqual(entry.project_id, project.id)


class TestUsageHistory(FabricTestCase):
    def test_scoped_to_owner_and_filterable_by_fabric(self) -> None:
        second = fabrics.create_fabric(
            self.db, self.user.id, FabricCreate(name="Red cotton", total_yards=2.0)
        )
        fabrics.record_usage(
            self.db, self.fabric.id, self.user.id, UsageCreate(yards_used=1.0, project_name="A")
        )
        fabrics.record_usage(
            self.db, second.id, self.user.id, UsageCreate(yards_used=0.5, project_name="B")
        )
        self.assertEqual(len(fabrics.usage_history(self.db, self.user.id)), 2)
        self.assertEqual(fabrics.usage_history(self.db, self.other.id), [])
        only_second = fabrics.usage_history(self.db, self.user.id, fabric_id=second.id)
        self.assertEqual([h.project_name for h in only_second], ["B"])


class TestFabricCrud(FabricTestCase):
    def test_list_puts_pinned_first(self) -> None:
        pinned = fabrics.create_fabric(
            self.db,
            self.user.id,
            FabricCreate(name="Velvet", total_yards=1.0, is_pinned=True),
        )
        listed = fabrics.list_fabrics(self.db, self.user.id)
        self.assertEqual(listed[0].id, pinned.id)
        self.assertEqual(fabrics.list_fabrics(self.db, self.other.id), [])

    def test_update_applies_only_given_fields(self) -> None:
        updated = fabrics.update_fabric(
            self.db, self.fabric.id, self.user.id, FabricUpdate(color="navy")
        )
        self.assertEqual(updated.color, "navy")
        self.assertEqual(updated.name, "Blue linen")
        self.assertAlmostEqual(updated.total_yards, 5.0)

    def test_update_never_nulls_required_fields(self) -> None:
        updated = fabrics.update_fabric(
            self.db, self.fabric.id, self.user.id, FabricUpdate(name=None, notes="soft")
        )
        self.assertEqual(updated.name, "Blue linen")
        self.assertEqual(updated.notes, "soft")

    def test_toggle_pin(self) -> None:
        self.assertTrue(fabrics.toggle_pin(self.db, self.fabric.id, self.user.id))
        self.assertFalse(fabrics.toggle_pin(self.db, self.fabric.id, self.user.id))

    def test_other_user_cannot_touch(self) -> None:
        with self.assertRaises(NotFoundError):
            fabrics.get_fabric(self.db, self.fabric.id, self.other.id)
        with self.assertRaises(NotFoundError):
            fabrics.delete_fabric(self.db, self.fabric.id, self.other.id)
        with self.assertRaises(NotFoundError):
            fabrics.toggle_pin(self.db, self.fabric.id, self.other.id)

    def test_delete_removes_usage(self) -> None:
        fabrics.record_usage(
            self.db, self.fabric.id, self.user.id, UsageCreate(yards_used=1.0, project_name="A")
        )
        fabrics.delete_fabric(self.db, self.fabric.id, self.user.id)
        self.assertEqual(self.db.query(Fabric).count(), 0)
        self.assertEqual(self.db.query(UsageEntry).count(), 0)


if __name__ == "__main__":
    unittest.main()
