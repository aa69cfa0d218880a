"""Tests for authcore.services.registration: atomic identity creation and duplicate handling."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from authcore.core.errors import CreationError, DuplicateEmailError
from authcore.core.security import verify_password
from authcore.models import Credential, Role, User
from authcore.services.credentials import CredentialStore
from authcore.services.registration import IdentityRegistrar
from tests.db_support import memory_session_factory, use_fast_hasher


def _counts(db) -> tuple[int, int, int]:
    return (db.query(User).count(), db.query(Credential).count(), db.query(Role).count())


class _NoPrecheckCredentialStore(CredentialStore):
    """Simulates a concurrent registration that passed the pre-check before ours committed."""

    def find_by_email(self, email: str):
        return None


class TestRegister(unittest.TestCase):
    def setUp(self) -> None:
        use_fast_hasher(self)
        self.db = memory_session_factory()()
        self.registrar = IdentityRegistrar(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_creates_user_credential_and_default_role(self) -> None:
        user_id = self.registrar.register("a@x.com", "password1", "Ann")
        user = self.db.get(User, user_id)
        self.assertEqual(user.name, "Ann")
        credential = self.db.query(Credential).filter(Credential.user_id == user_id).one()
        self.assertEqual(credential.email, "a@x.com")
        self.assertFalse(credential.is_verified)
        self.assertNotEqual(credential.password_hash, "password1")
        self.assertTrue(verify_password("password1", credential.password_hash))
        role = self.db.query(Role).filter(Role.user_id == user_id).one()
        self.assertEqual(role.role, "user")
        self.assertIsNone(role.title)

    def test_name_is_optional(self) -> None:
        user_id = self.registrar.register("noname@x.com", "password1")
        self.assertIsNone(self.db.get(User, user_id).name)

    def test_duplicate_email_rejected_before_hashing(self) -> None:
        self.registrar.register("a@x.com", "password1", "Ann")
        before = _counts(self.db)
        hasher = MagicMock(return_value="digest")
        with self.assertRaises(DuplicateEmailError):
            IdentityRegistrar(self.db, hasher=hasher).register("a@x.com", "password2", "Another Ann")
        hasher.assert_not_called()
        self.assertEqual(_counts(self.db), before)
        self.assertEqual(before, (1, 1, 1))

    def test_distinct_emails_register_independently(self) -> None:
        self.registrar.register("a@x.com", "password1", "Ann")
        self.registrar.register("b@x.com", "password1", "Bob")
        self.assertEqual(_counts(self.db), (2, 2, 2))

    def test_constraint_race_rolls_back_everything(self) -> None:
        self.registrar.register("a@x.com", "password1", "Ann")
        racing = IdentityRegistrar(self.db, credentials=_NoPrecheckCredentialStore(self.db))
        with self.assertRaises(CreationError) as ctx:
            racing.register("a@x.com", "password2", "Racer")
        self.assertEqual(ctx.exception.message, "Failed to create user")
        self.assertEqual(_counts(self.db), (1, 1, 1))
        self.assertEqual(self.db.query(User).filter(User.name == "Racer").count(), 0)

    def test_role_failure_rolls_back_user_and_credential(self) -> None:
        roles = MagicMock()
        roles.assign_default.side_effect = OperationalError("INSERT INTO roles", {}, Exception("down"))
        registrar = IdentityRegistrar(self.db, roles=roles)
        with self.assertRaises(CreationError):
            registrar.register("c@x.com", "password1", "Cat")
        self.assertEqual(_counts(self.db), (0, 0, 0))

    def test_unencodable_password_writes_nothing(self) -> None:
        with self.assertRaises(CreationError):
            self.registrar.register("s@x.com", "\ud800password", "Sur")
        self.assertEqual(_counts(self.db), (0, 0, 0))

    def test_register_with_role(self) -> None:
        user_id = self.registrar.register_with_role(
            "root@x.com", "password1", "Root", role="admin", title="Operator"
        )
        role = self.db.query(Role).filter(Role.user_id == user_id).one()
        self.assertEqual((role.role, role.title), ("admin", "Operator"))

    def test_session_usable_after_failed_registration(self) -> None:
        self.registrar.register("a@x.com", "password1", "Ann")
        racing = IdentityRegistrar(self.db, credentials=_NoPrecheckCredentialStore(self.db))
        with self.assertRaises(CreationError):
            racing.register("a@x.com", "password2", "Racer")
        self.registrar.register("d@x.com", "password1", "Dee")
        self.assertEqual(_counts(self.db), (2, 2, 2))


if __name__ == "__main__":
    unittest.main()
