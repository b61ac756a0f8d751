"""
Pydantic request / response schemas for the travel-diary API.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Diary entries
# ═══════════════════════════════════════════════════════════════════════════════


class DiaryEntryIn(BaseModel):
    """Body of POST and PUT — a complete diary record (PUT replaces in full)."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime
    location: str = Field(..., min_length=1)
    photos: List[str] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # dates without an offset are taken as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class DiaryEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str
    date: datetime
    location: str
    photos: List[str] = Field(default_factory=list)
