import unittest

from drivesh.auth import AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_oauth(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": "/tmp/client_secrets.json",
                "token_file": "/tmp/token.json",
            },
        )
        self.assertEqual(info.kind, "oauth")
        self.assertEqual(info.token_file, "/tmp/token.json")

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="service_account", data={})

    def test_auth_info_missing_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"client_secrets_file": "x"})

    def test_auth_state_round_trip(self) -> None:
        state = {"client_secrets_file": "/s.json", "token_file": "/t.json"}
        info = AuthInfo.from_auth_state(state)
        self.assertEqual(info.client_secrets_file, "/s.json")
        self.assertEqual(info.to_auth_state(), state)

    def test_from_empty_auth_state_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo.from_auth_state({})


if __name__ == "__main__":
    unittest.main()
