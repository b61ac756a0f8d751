"""
Tests for the credential and diary stores against in-memory SQLite.
"""

import uuid
from contextlib import asynccontextmanager
from datetime import datetime

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from database.session import Database
from database.stores import CredentialStore, DiaryStore, DuplicateKeyError


@asynccontextmanager
async def _database(settings):
    db = Database(settings)
    await db.connect()
    try:
        yield db
    finally:
        await db.dispose()


def _fields(**overrides) -> dict:
    fields = {
        "title": "Trip",
        "description": "d",
        "date": datetime(2024, 1, 1),
        "location": "Paris",
    }
    fields.update(overrides)
    return fields


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_create_and_find(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                await CredentialStore(session).create("alice", "hash")
            async with db.session() as session:
                user = await CredentialStore(session).find_by_username("alice")
        assert user is not None
        assert user.password == "hash"

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                assert await CredentialStore(session).find_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                await CredentialStore(session).create("alice", "hash")
            with pytest.raises(DuplicateKeyError):
                async with db.session() as session:
                    await CredentialStore(session).create("alice", "other")


class TestDiaryStore:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_default_photos(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                entry = await DiaryStore(session).create(_fields())
        assert isinstance(entry.id, uuid.UUID)
        assert entry.photos == []

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                store = DiaryStore(session)
                first = await store.create(_fields(title="first"))
                second = await store.create(_fields(title="second"))
            async with db.session() as session:
                entries = await DiaryStore(session).list()
        assert [e.id for e in entries] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_replace_overwrites_every_field(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                entry = await DiaryStore(session).create(_fields(photos=["http://x/1.jpg"]))
            async with db.session() as session:
                updated = await DiaryStore(session).replace(
                    str(entry.id), _fields(title="New", location="Rome")
                )
        assert updated.title == "New"
        assert updated.location == "Rome"
        assert updated.photos == []

    @pytest.mark.asyncio
    async def test_replace_missing_returns_none(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                assert await DiaryStore(session).replace(uuid.uuid4(), _fields()) is None

    @pytest.mark.asyncio
    async def test_delete(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                entry = await DiaryStore(session).create(_fields())
            async with db.session() as session:
                assert await DiaryStore(session).delete(entry.id) is True
            async with db.session() as session:
                assert await DiaryStore(session).delete(entry.id) is False
                assert await DiaryStore(session).get(entry.id) is None

    @pytest.mark.asyncio
    async def test_invalid_id_is_absent(self, settings):
        async with _database(settings) as db:
            async with db.session() as session:
                store = DiaryStore(session)
                assert await store.get("not-a-uuid") is None
                assert await store.delete("not-a-uuid") is False


class TestDatabase:
    @pytest.mark.asyncio
    async def test_connect_failure_raises(self, settings):
        bad = settings.model_copy(
            update={"database_url": "sqlite+aiosqlite:////nonexistent-dir/diary.db"}
        )
        db = Database(bad)
        try:
            with pytest.raises(OperationalError):
                await db.connect()
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_connect_creates_tables(self, settings):
        async with _database(settings) as db:
            async with db.engine.connect() as conn:
                tables = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_table_names()
                )
        assert {"user", "diaryEntry"} <= set(tables)
