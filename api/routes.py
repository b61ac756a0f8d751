"""
REST routes — liveness and diary-entry CRUD.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from auth.dependencies import diary_store, get_current_claims, require_auth_for_mutations
from database.models import DiaryEntry
from database.stores import DiaryStore
from utils.schemas import DiaryEntryIn, DiaryEntryOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Diary entry not found",
    )


@router.get("/", response_class=PlainTextResponse, tags=["health"])
async def root() -> str:
    return "Hello World!"


# ── Diary entries ──────────────────────────────────────────────────────


@router.get("/diary-entries", response_model=List[DiaryEntryOut], tags=["diary"])
async def list_entries(
    claims: Dict[str, Any] = Depends(get_current_claims),
    store: DiaryStore = Depends(diary_store),
) -> List[DiaryEntry]:
    return await store.list()


@router.post(
    "/diary-entries",
    response_model=DiaryEntryOut,
    status_code=status.HTTP_201_CREATED,
    tags=["diary"],
)
async def create_entry(
    body: DiaryEntryIn,
    claims: Dict[str, Any] = Depends(get_current_claims),
    store: DiaryStore = Depends(diary_store),
) -> DiaryEntry:
    entry = await store.create(body.model_dump())
    logger.info("Diary entry %s created by %s", entry.id, claims["username"])
    return entry


@router.get("/diary-entries/{entry_id}", response_model=DiaryEntryOut, tags=["diary"])
async def get_entry(
    entry_id: str,
    claims: Dict[str, Any] = Depends(get_current_claims),
    store: DiaryStore = Depends(diary_store),
) -> DiaryEntry:
    entry = await store.get(entry_id)
    if entry is None:
        raise _not_found()
    return entry


@router.put("/diary-entries/{entry_id}", response_model=DiaryEntryOut, tags=["diary"])
async def replace_entry(
    entry_id: str,
    body: DiaryEntryIn,
    claims: Dict[str, Any] | None = Depends(require_auth_for_mutations),
    store: DiaryStore = Depends(diary_store),
) -> DiaryEntry:
    entry = await store.replace(entry_id, body.model_dump())
    if entry is None:
        raise _not_found()
    logger.info("Diary entry %s replaced", entry.id)
    return entry


@router.delete(
    "/diary-entries/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    tags=["diary"],
)
async def delete_entry(
    entry_id: str,
    claims: Dict[str, Any] | None = Depends(require_auth_for_mutations),
    store: DiaryStore = Depends(diary_store),
) -> Response:
    if not await store.delete(entry_id):
        raise _not_found()
    logger.info("Diary entry %s deleted", entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
