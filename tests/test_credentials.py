import unittest

from prefquiz.auth.credentials import CredentialStore, hash_password, is_valid_format
from prefquiz.errors import DuplicateIdentifier, InvalidCredentials, InvalidFormat

from ._support import memory_store


class CredentialStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = memory_store()
        self.creds = CredentialStore(self.store)

    def tearDown(self) -> None:
        self.store.close()

    def test_register_then_duplicate(self) -> None:
        user = self.creds.register("ab", "pw1")
        self.assertEqual(user.user_id, "ab")
        with self.assertRaises(DuplicateIdentifier):
            self.creds.register("ab", "pw2")
        self.assertEqual(self.creds.authenticate("ab", "pw1").user_id, "ab")
        with self.assertRaises(InvalidCredentials):
            self.creds.authenticate("ab", "wrong")

    def test_unknown_user_is_invalid_credentials(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.creds.authenticate("nobody", "pw")

    def test_stores_digest_not_raw_password(self) -> None:
        self.creds.register("u1", "secret")
        stored = self.store.query("SELECT password FROM users WHERE user_id = 'u1'")[0]["password"]
        self.assertNotEqual(stored, "secret")
        self.assertEqual(stored, hash_password("secret"))
        self.assertEqual(len(stored), 64)

    def test_hash_is_deterministic_sha256(self) -> None:
        self.assertEqual(hash_password("abc"), hash_password("abc"))
        self.assertEqual(
            hash_password("abc"),
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
        )

    def test_register_rejects_bad_format_before_storage(self) -> None:
        for user_id, password in [("", "pw"), ("toolong12", "pw"), ("a b", "pw"), ("u1", ""), ("u1", "123456789")]:
            with self.subTest(user_id=user_id, password=password):
                with self.assertRaises(InvalidFormat):
                    self.creds.register(user_id, password)
        self.assertEqual(self.store.query("SELECT * FROM users"), [])

    def test_format_predicate(self) -> None:
        self.assertTrue(is_valid_format("a"))
        self.assertTrue(is_valid_format("Ab3_-.@!"))
        self.assertFalse(is_valid_format("東京"))
        self.assertFalse(is_valid_format("abc/def"))
        self.assertFalse(is_valid_format("abcdefghi"))


if __name__ == "__main__":
    unittest.main()
