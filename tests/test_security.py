"""Tests for password hashing and the JWT issuer/verifier."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from fleetdesk.core.config import settings
from fleetdesk.core.errors import ExpiredToken, MalformedToken
from fleetdesk.core.security import (
    create_access_token,
    decode_access_token,
    generate_temp_password,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies_and_is_salted(self) -> None:
        h1 = hash_password("secret123")
        h2 = hash_password("secret123")
        self.assertNotEqual(h1, h2)
        self.assertTrue(verify_password("secret123", h1))
        self.assertFalse(verify_password("wrong-pass", h1))

    def test_corrupt_hash_is_a_mismatch_not_an_error(self) -> None:
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))

    def test_temp_password_is_random_and_url_safe(self) -> None:
        a, b = generate_temp_password(), generate_temp_password()
        self.assertNotEqual(a, b)
        self.assertEqual(len(a), 12)
        self.assertRegex(a, r"^[A-Za-z0-9_-]+$")


class TestAccessToken(unittest.TestCase):
    def test_round_trip_returns_user_id(self) -> None:
        self.assertEqual(decode_access_token(create_access_token(42)), 42)

    def test_token_carries_only_identity_and_times(self) -> None:
        token = create_access_token(7)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(set(payload), {"sub", "iat", "exp"})
        self.assertEqual(payload["exp"] - payload["iat"], settings.JWT_EXPIRE_MINUTES * 60)

    def test_expired_token(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=settings.JWT_EXPIRE_MINUTES + 5)
        with self.assertRaises(ExpiredToken):
            decode_access_token(create_access_token(1, now=issued))

    def test_token_signed_with_other_secret_is_malformed(self) -> None:
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "another-secret",
            algorithm="HS256",
        )
        with self.assertRaises(MalformedToken):
            decode_access_token(token)

    def test_garbage_is_malformed(self) -> None:
        with self.assertRaises(MalformedToken):
            decode_access_token("abc.def.ghi")

    def test_missing_or_non_numeric_sub_is_malformed(self) -> None:
        secret = settings.JWT_SECRET.get_secret_value()
        exp = datetime.now(UTC) + timedelta(minutes=5)
        for payload in ({"exp": exp}, {"sub": "admin", "exp": exp}, {"sub": "0", "exp": exp}):
            token = jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)
            with self.subTest(payload=payload), self.assertRaises(MalformedToken):
                decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
