"""Tests for authcore.services.roles: append-only history and current-role selection."""

import unittest

from authcore.models import Role
from authcore.services.roles import RoleStore
from tests.db_support import FakeClock, add_user, memory_session_factory


class TestRoleStore(unittest.TestCase):
    def setUp(self) -> None:
        self.db = memory_session_factory()()
        self.clock = FakeClock()
        self.roles = RoleStore(self.db, clock=self.clock)
        self.user = add_user(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_no_rows_returns_none(self) -> None:
        self.assertIsNone(self.roles.current_role(self.user.id))

    def test_assign_default_is_user_without_title(self) -> None:
        self.roles.assign_default(self.user.id)
        current = self.roles.current_role(self.user.id)
        self.assertEqual(current.role, "user")
        self.assertIsNone(current.title)

    def test_later_assignment_wins(self) -> None:
        self.roles.assign_default(self.user.id)
        self.clock.advance(seconds=1)
        self.roles.assign(self.user.id, "employee", "Support lead")
        current = self.roles.current_role(self.user.id)
        self.assertEqual(current.role, "employee")
        self.assertEqual(current.title, "Support lead")

    def test_identical_timestamps_fall_back_to_insertion_order(self) -> None:
        self.roles.assign(self.user.id, "client")
        self.roles.assign(self.user.id, "admin")
        self.assertEqual(self.roles.current_role(self.user.id).role, "admin")

    def test_timestamp_beats_insertion_order(self) -> None:
        self.clock.advance(hours=1)
        self.roles.assign(self.user.id, "admin")
        self.clock.advance(hours=-2)
        self.roles.assign(self.user.id, "bot")
        self.assertEqual(self.roles.current_role(self.user.id).role, "admin")

    def test_history_is_retained(self) -> None:
        self.roles.assign_default(self.user.id)
        self.clock.advance(days=1)
        self.roles.assign(self.user.id, "admin")
        rows = self.db.query(Role).filter(Role.user_id == self.user.id).order_by(Role.id).all()
        self.assertEqual([r.role for r in rows], ["user", "admin"])

    def test_rows_are_stamped_by_the_injected_clock(self) -> None:
        row = self.roles.assign(self.user.id, "client")
        self.assertEqual(row.created_at.replace(tzinfo=None), self.clock.now.replace(tzinfo=None))
        self.assertEqual(row.updated_at, row.created_at)

    def test_roles_are_per_identity(self) -> None:
        other = add_user(self.db, name="Other")
        self.roles.assign(other.id, "admin")
        self.assertIsNone(self.roles.current_role(self.user.id))


if __name__ == "__main__":
    unittest.main()
