"""
Auth API routes — register, login.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from auth.dependencies import credential_store, get_settings
from auth.password import hash_password, verify_password
from auth.tokens import create_token
from config.settings import Settings
from database.stores import CredentialStore, DuplicateKeyError
from utils.schemas import LoginRequest, MessageResponse, RegisterRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    """Stand-in hash so unknown usernames cost one bcrypt check too."""
    return hash_password("dummy-password", rounds)


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    store: CredentialStore = Depends(credential_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Register a new user."""
    try:
        await store.create(req.username, hash_password(req.password, settings.bcrypt_rounds))
    except DuplicateKeyError:
        logger.info("Registration refused, username taken: %s", req.username)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists",
        )

    logger.info("Registered user %s", req.username)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    store: CredentialStore = Depends(credential_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with username + password."""
    user = await store.find_by_username(req.username)

    stored_hash = user.password if user is not None else _dummy_hash(settings.bcrypt_rounds)
    password_ok = verify_password(req.password, stored_hash)

    if user is None or not password_ok:
        logger.warning("Failed login for %s", req.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = create_token(
        {"username": user.username},
        settings.jwt_secret,
        settings.jwt_algorithm,
        settings.jwt_expiry_seconds,
    )
    logger.info("Login: %s", user.username)
    return {"token": token}
