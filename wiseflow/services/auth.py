from __future__ import annotations

import os
from typing import Dict, Optional

from fastapi import Header, HTTPException, status
from jose import JWTError, jwt

from wiseflow import config


class SupabaseAuthSettings:
    def __init__(self) -> None:
        self.jwt_secret = os.getenv("SUPABASE_JWT_SECRET", "").strip()
        self.audience = config.SUPABASE_JWT_AUDIENCE
        url = os.getenv("SUPABASE_URL", "").strip().rstrip("/")
        self.issuer = f"{url}/auth/v1" if url else ""
        self.dev_bypass = config.dev_bypass_auth()


def verify_jwt(authorization: Optional[str]) -> Dict:
    settings = SupabaseAuthSettings()
    if settings.dev_bypass:
        return dict(config.DEMO_USER)

    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token format")

    if not settings.jwt_secret:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token verification unavailable")

    try:
        claims = jwt.decode(
            parts[1],
            settings.jwt_secret,
            algorithms=["HS256"],
            audience=settings.audience or None,
            issuer=settings.issuer or None,
            options={"verify_aud": bool(settings.audience), "verify_iss": bool(settings.issuer)},
        )
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    if not claims.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has no subject")
    return claims


def current_user(authorization: Optional[str] = Header(None)) -> Dict:
    return verify_jwt(authorization)
