"""
Credential and diary stores — thin wrappers that map one operation to
one database call on a request-scoped session. Writes commit before
returning so the caller only reports what was actually persisted.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import DiaryEntry, User

logger = logging.getLogger(__name__)

_ENTRY_FIELDS = ("title", "description", "date", "location", "photos")


class DuplicateKeyError(Exception):
    """Raised when a unique constraint rejects an insert."""


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class CredentialStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def create(self, username: str, password_hash: str) -> User:
        """
        Insert a user. The primary key on ``username`` is the uniqueness
        check; a concurrent duplicate surfaces as ``DuplicateKeyError``.
        """
        user = User(username=username, password=password_hash)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateKeyError(username) from exc
        return user


class DiaryStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[DiaryEntry]:
        result = await self.session.execute(
            select(DiaryEntry).order_by(DiaryEntry.created_at, DiaryEntry.id)
        )
        return list(result.scalars().all())

    async def get(self, entry_id: str | uuid.UUID) -> Optional[DiaryEntry]:
        eid = _to_uuid(entry_id)
        if eid is None:
            return None
        return await self.session.get(DiaryEntry, eid)

    async def create(self, fields: Dict[str, Any]) -> DiaryEntry:
        entry = DiaryEntry(id=uuid.uuid4(), **_entry_values(fields))
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def replace(
        self, entry_id: str | uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[DiaryEntry]:
        entry = await self.get(entry_id)
        if entry is None:
            return None
        for key, value in _entry_values(fields).items():
            setattr(entry, key, value)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def delete(self, entry_id: str | uuid.UUID) -> bool:
        entry = await self.get(entry_id)
        if entry is None:
            return False
        await self.session.delete(entry)
        await self.session.commit()
        return True


def _entry_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Full-record values: every field is written, ``photos`` defaults to []."""
    values = {key: fields.get(key) for key in _ENTRY_FIELDS}
    values["photos"] = list(values["photos"] or [])
    return values
