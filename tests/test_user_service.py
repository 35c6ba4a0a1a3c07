import threading
import unittest
from datetime import timedelta
from unittest.mock import patch

import jwt

from app.core.security import PHONE_NUMBER_CLAIM, check_password, hash_password
from app.exceptions import BadRequestError, ConflictError, UnauthorizedError
from app.schemas import UserLogin
from tests.support import JWT_KEY, PASSWORD, DatabaseTestCase, registration

PHONE = "233249885566"


class RegisterTests(DatabaseTestCase):
    async def test_valid_registration_returns_phone_number(self) -> None:
        async with self.session() as session:
            response = await self.user_service(session).register(registration(PHONE))

        self.assertTrue(response.success)
        self.assertEqual(response.data, PHONE)

        async with self.session() as session:
            user = await self.load_user(session, PHONE)
            self.assertEqual(user.username, "tester01")
            self.assertNotEqual(user.password_hash, PASSWORD.encode())
            self.assertTrue(user.password_salt)
            self.assertEqual(user.wallets, [])

    async def test_password_mismatch_is_bad_request(self) -> None:
        async with self.session() as session:
            with self.assertRaises(BadRequestError) as ctx:
                await self.user_service(session).register(registration(PHONE, confirm_password="Password124"))
            self.assertEqual(ctx.exception.message, "Provided passwords do not match.")

        async with self.session() as session:
            self.assertIsNone(await self.user_service(session).get_user(PHONE))

    async def test_rejected_phone_number_is_bad_request(self) -> None:
        self.validator_factory.get_phone_number_validator = lambda: (lambda phone_number: False)

        async with self.session() as session:
            with self.assertRaises(BadRequestError):
                await self.user_service(session).register(registration(PHONE))

    async def test_duplicate_phone_number_is_conflict(self) -> None:
        await self.register(PHONE)

        async with self.session() as session:
            with self.assertRaises(ConflictError) as ctx:
                await self.user_service(session).register(registration(PHONE))
            self.assertIn(PHONE, ctx.exception.message)

    async def test_password_hashing_runs_off_the_event_loop(self) -> None:
        hashing_threads = []

        def recording_hash(password, rounds=12):
            hashing_threads.append(threading.get_ident())
            return hash_password(password, rounds=rounds)

        with patch("app.services.user.hash_password", recording_hash):
            async with self.session() as session:
                await self.user_service(session).register(registration(PHONE))

        self.assertEqual(len(hashing_threads), 1)
        self.assertNotEqual(hashing_threads[0], threading.get_ident())


class LoginTests(DatabaseTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        await self.register(PHONE)

    async def test_valid_credentials_issue_token_with_phone_claim(self) -> None:
        async with self.session() as session:
            response = await self.user_service(session).login(UserLogin(phone_number=PHONE, password=PASSWORD))

        self.assertTrue(response.data)
        claims = jwt.decode(response.data, JWT_KEY, algorithms=["HS256"])
        self.assertEqual(claims[PHONE_NUMBER_CLAIM], PHONE)
        self.assertIn("exp", claims)

    async def test_unknown_user_and_wrong_password_look_the_same(self) -> None:
        async with self.session() as session:
            service = self.user_service(session)
            with self.assertRaises(UnauthorizedError) as unknown:
                await service.login(UserLogin(phone_number="233200000000", password=PASSWORD))
            with self.assertRaises(UnauthorizedError) as wrong:
                await service.login(UserLogin(phone_number=PHONE, password="NotThePassword"))

        self.assertEqual(unknown.exception.message, wrong.exception.message)

    async def test_password_check_runs_off_the_event_loop(self) -> None:
        checking_threads = []

        def recording_check(password, password_hash, password_salt):
            checking_threads.append(threading.get_ident())
            return check_password(password, password_hash, password_salt)

        with patch("app.services.user.check_password", recording_check):
            async with self.session() as session:
                response = await self.user_service(session).login(UserLogin(phone_number=PHONE, password=PASSWORD))

        self.assertTrue(response.success)
        self.assertEqual(len(checking_threads), 1)
        self.assertNotEqual(checking_threads[0], threading.get_ident())


class AuthenticatedUserTests(DatabaseTestCase):
    async def test_principal_resolves_to_user_with_wallets(self) -> None:
        await self.register(PHONE)

        async with self.session() as session:
            user = await self.user_service(session).get_authenticated_user({PHONE_NUMBER_CLAIM: PHONE})
            self.assertEqual(user.phone_number, PHONE)
            self.assertEqual(user.wallets, [])

    async def test_missing_claim_is_unauthorized(self) -> None:
        async with self.session() as session:
            with self.assertRaises(UnauthorizedError):
                await self.user_service(session).get_authenticated_user({"sub": PHONE})

    async def test_unknown_user_is_unauthorized(self) -> None:
        async with self.session() as session:
            with self.assertRaises(UnauthorizedError):
                await self.user_service(session).get_authenticated_user({PHONE_NUMBER_CLAIM: PHONE})


class UserDetailsTests(DatabaseTestCase):
    async def test_details_are_a_public_projection(self) -> None:
        await self.register(PHONE)

        async with self.session() as session:
            response = await self.user_service(session).get_user_details(PHONE)

        self.assertEqual(response.data.username, "tester01")
        self.assertEqual(response.data.phone_number, PHONE)
        self.assertIsNotNone(response.data.created_at)
        self.assertNotIn("passwordHash", response.model_dump(by_alias=True)["data"])

    async def test_created_at_is_utc_after_reload(self) -> None:
        await self.register(PHONE)

        async with self.session() as session:
            user = await self.load_user(session, PHONE)

        self.assertIsNotNone(user.created_at.tzinfo)
        self.assertEqual(user.created_at.utcoffset(), timedelta(0))

    async def test_missing_user_is_bad_request_not_not_found(self) -> None:
        async with self.session() as session:
            with self.assertRaises(BadRequestError):
                await self.user_service(session).get_user_details(PHONE)


if __name__ == "__main__":
    unittest.main()
