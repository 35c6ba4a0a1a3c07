import unittest
from datetime import timedelta

import jwt
from pydantic import ValidationError

from app.core.security import PHONE_NUMBER_CLAIM, check_password, decode_token, hash_password, issue_token
from app.exceptions import UnauthorizedError
from tests.support import JWT_KEY, make_settings


class PasswordHashingTests(unittest.TestCase):
    def test_digest_verifies_only_the_original_password(self) -> None:
        digest, salt = hash_password("Password123", rounds=4)

        self.assertTrue(check_password("Password123", digest, salt))
        self.assertFalse(check_password("password123", digest, salt))

    def test_each_hash_uses_a_fresh_salt(self) -> None:
        first = hash_password("Password123", rounds=4)
        second = hash_password("Password123", rounds=4)

        self.assertNotEqual(first[1], second[1])
        self.assertNotEqual(first[0], second[0])


class TokenTests(unittest.TestCase):
    def test_issued_claims_round_trip(self) -> None:
        token = issue_token({PHONE_NUMBER_CLAIM: "233249885566"}, JWT_KEY, timedelta(minutes=1))

        claims = decode_token(token, JWT_KEY)

        self.assertEqual(claims[PHONE_NUMBER_CLAIM], "233249885566")

    def test_expired_token_is_rejected(self) -> None:
        token = issue_token({PHONE_NUMBER_CLAIM: "233249885566"}, JWT_KEY, timedelta(seconds=-5))

        with self.assertRaises(UnauthorizedError):
            decode_token(token, JWT_KEY)

    def test_token_without_expiry_is_rejected(self) -> None:
        token = jwt.encode({PHONE_NUMBER_CLAIM: "233249885566"}, JWT_KEY, algorithm="HS256")

        with self.assertRaises(UnauthorizedError):
            decode_token(token, JWT_KEY)


class SettingsTests(unittest.TestCase):
    def test_short_jwt_key_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(jwt_key="too-short")

    def test_jwt_duration_must_be_positive(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(jwt_duration=0)

    def test_jwt_duration_must_be_an_integer(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(jwt_duration="soon")


if __name__ == "__main__":
    unittest.main()
