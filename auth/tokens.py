"""
Bearer token creation and verification.

Tokens are compact HS256 JWTs carrying a ``username`` claim. The secret,
algorithm and lifetime come from ``Settings`` (env vars ``JWT_SECRET``,
``JWT_ALGORITHM``, ``JWT_EXPIRY_SECONDS``).
"""

from __future__ import annotations

import time
from typing import Any, Dict

import jwt


class TokenError(Exception):
    """Token is malformed, badly signed, expired or lacks a username."""


def create_token(
    claims: Dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expiry_seconds: int = 0,
) -> str:
    """Sign ``claims``; an ``exp`` claim is added only when ``expiry_seconds > 0``."""
    payload = dict(claims)
    now = int(time.time())
    payload["iat"] = now
    if expiry_seconds > 0:
        payload["exp"] = now + expiry_seconds
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """
    Verify token and return its claims.

    Raises ``TokenError`` on invalid or expired tokens.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.InvalidTokenError as exc:
        raise TokenError(str(exc)) from exc
    if not isinstance(claims.get("username"), str):
        raise TokenError("token has no username claim")
    return claims
