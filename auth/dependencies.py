"""
FastAPI dependencies for authentication.

Provides the store dependencies and ``get_current_claims``, the bearer
token gate placed in front of every protected route.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.tokens import TokenError, verify_token
from config.settings import Settings
from database.session import get_db_session
from database.stores import CredentialStore, DiaryStore

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def credential_store(
    session: AsyncSession = Depends(get_db_session),
) -> CredentialStore:
    return CredentialStore(session)


async def diary_store(
    session: AsyncSession = Depends(get_db_session),
) -> DiaryStore:
    return DiaryStore(session)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Dict[str, Any]:
    """
    Extract and verify the Bearer token.

    No bearer token → 401, a token that fails verification → 403. The
    decoded claims are returned and kept on ``request.state.claims``.
    """
    if credentials is None or not credentials.credentials:
        logger.debug("Rejected %s %s: no bearer token", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    settings = get_settings(request)
    try:
        claims = verify_token(
            credentials.credentials,
            settings.jwt_secret,
            settings.jwt_algorithm,
        )
    except TokenError as exc:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )

    request.state.claims = claims
    return claims


async def require_auth_for_mutations(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Optional[Dict[str, Any]]:
    """Run the token gate unless ``require_auth_for_mutations`` is switched off."""
    if not get_settings(request).require_auth_for_mutations:
        return None
    return await get_current_claims(request, credentials)
