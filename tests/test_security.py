"""Unit tests for authcore.core.security: Argon2 hashing, malformed hashes, session tokens."""

import unittest

from authcore.core.errors import HashFormatError
from authcore.core.security import (
    _check_password,
    generate_session_token,
    hash_password,
    needs_rehash,
    verify_password,
)


class TestHashPassword(unittest.TestCase):
    """hash_password produces self-contained Argon2id digests with a fresh salt."""

    def test_digest_is_argon2id(self) -> None:
        digest = hash_password("password1")
        self.assertTrue(digest.startswith("$argon2id$"))
        self.assertNotIn("password1", digest)

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("password1"), hash_password("password1"))


class TestVerifyPassword(unittest.TestCase):
    """verify_password accepts only the original password and never raises."""

    @classmethod
    def setUpClass(cls) -> None:
        cls.digest = hash_password("correct horse battery")

    def test_correct_password(self) -> None:
        self.assertTrue(verify_password("correct horse battery", self.digest))

    def test_wrong_password(self) -> None:
        self.assertFalse(verify_password("correct horse battery!", self.digest))
        self.assertFalse(verify_password("", self.digest))

    def test_malformed_digest_is_a_mismatch(self) -> None:
        self.assertFalse(verify_password("correct horse battery", "not-a-hash"))
        self.assertFalse(verify_password("correct horse battery", "$argon2id$garbage"))

    def test_non_ascii_digest_is_a_mismatch(self) -> None:
        self.assertFalse(verify_password("password1", "$argon2id$v=19$m=65536,t=3,p=4$é$é"))
        self.assertFalse(verify_password("password1", "ümlaut-corrupt"))

    def test_unencodable_password_is_a_mismatch(self) -> None:
        self.assertFalse(verify_password("\ud800password", self.digest))

    def test_missing_digest_is_a_mismatch(self) -> None:
        self.assertFalse(verify_password("correct horse battery", ""))
        self.assertFalse(verify_password("correct horse battery", None))

    def test_check_password_signals_hash_format_error(self) -> None:
        with self.assertRaises(HashFormatError):
            _check_password("whatever", "not-a-hash")
        with self.assertRaises(HashFormatError):
            _check_password("whatever", "$argon2id$v=19$m=65536,t=3,p=4$é$é")


class TestNeedsRehash(unittest.TestCase):
    def test_fresh_digest_does_not_need_rehash(self) -> None:
        self.assertFalse(needs_rehash(hash_password("password1")))

    def test_weaker_parameters_need_rehash(self) -> None:
        weak = "$argon2id$v=19$m=8,t=1,p=1$c29tZXNhbHQ$CTFhFdXPJO1aFaMaO6Mm5c8y7cJHAph8ArZWb2GRPPc"
        self.assertTrue(needs_rehash(weak))


class TestGenerateSessionToken(unittest.TestCase):
    """Tokens are URL-safe and carry at least 128 bits of entropy."""

    def test_default_length(self) -> None:
        token = generate_session_token()
        # 32 random bytes -> 43 base64url characters
        self.assertEqual(len(token), 43)

    def test_tokens_are_unique(self) -> None:
        tokens = {generate_session_token() for _ in range(200)}
        self.assertEqual(len(tokens), 200)

    def test_explicit_size(self) -> None:
        self.assertEqual(len(generate_session_token(16)), 22)


if __name__ == "__main__":
    unittest.main()
