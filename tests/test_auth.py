from __future__ import annotations

import os
import sys
import time
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi import HTTPException
from jose import jwt

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wiseflow.services.auth import current_user, verify_jwt  # noqa: E402

SECRET = "test-jwt-secret"
AUTH_ENV = {
    "DEV_BYPASS_AUTH": "false",
    "SUPABASE_JWT_SECRET": SECRET,
    "SUPABASE_URL": "",
}


def _token(claims: dict, secret: str = SECRET) -> str:
    payload = {"aud": "authenticated", "exp": int(time.time()) + 300, **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


class SupabaseAuthTests(unittest.TestCase):
    def test_dev_bypass_returns_demo_user(self) -> None:
        with patch.dict(os.environ, {"DEV_BYPASS_AUTH": "true"}):
            self.assertEqual(current_user(None)["sub"], "demo-user")

    def test_valid_token_returns_claims(self) -> None:
        with patch.dict(os.environ, AUTH_ENV):
            claims = verify_jwt(f"Bearer {_token({'sub': 'user-123', 'email': 'a@b.c'})}")
        self.assertEqual(claims["sub"], "user-123")

    def test_missing_and_malformed_headers(self) -> None:
        with patch.dict(os.environ, AUTH_ENV):
            for header in [None, "", "Token abc", "Bearer"]:
                with self.subTest(header=header):
                    with self.assertRaises(HTTPException) as ctx:
                        verify_jwt(header)
                    self.assertEqual(ctx.exception.status_code, 401)

    def test_wrong_secret_rejected(self) -> None:
        with patch.dict(os.environ, AUTH_ENV):
            with self.assertRaises(HTTPException) as ctx:
                verify_jwt(f"Bearer {_token({'sub': 'user-123'}, secret='other')}")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_expired_token_rejected(self) -> None:
        with patch.dict(os.environ, AUTH_ENV):
            with self.assertRaises(HTTPException):
                verify_jwt(f"Bearer {_token({'sub': 'user-123', 'exp': int(time.time()) - 10})}")

    def test_token_without_subject_rejected(self) -> None:
        with patch.dict(os.environ, AUTH_ENV):
            with self.assertRaises(HTTPException):
                verify_jwt(f"Bearer {_token({})}")

    def test_issuer_checked_when_supabase_url_set(self) -> None:
        env = {**AUTH_ENV, "SUPABASE_URL": "https://proj.supabase.co"}
        good = _token({"sub": "user-1", "iss": "https://proj.supabase.co/auth/v1"})
        bad = _token({"sub": "user-1", "iss": "https://evil.example/auth/v1"})
        with patch.dict(os.environ, env):
            self.assertEqual(verify_jwt(f"Bearer {good}")["sub"], "user-1")
            with self.assertRaises(HTTPException):
                verify_jwt(f"Bearer {bad}")


if __name__ == "__main__":
    unittest.main()
