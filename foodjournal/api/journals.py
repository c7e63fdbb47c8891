"""Journal API routes — users, entries, categories."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from foodjournal.db.connection import Store
from foodjournal.db.errors import (
    QueryExecutionError,
    ReferentialIntegrityError,
    UniqueConstraintError,
)
from foodjournal.db.models import UserRepository
from foodjournal.journal.service import (
    JournalEntryNotFound,
    JournalService,
    JournalValidationError,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


class UserCreate(BaseModel):
    email: str
    password: str


class JournalBody(BaseModel):
    image: str | None = None
    description: str | None = None
    category: str | None = None


def app_store(request: Request) -> Store:
    """The store owned by the app serving this request."""
    return request.app.state.store


def journal_service(request: Request, store: Store = Depends(app_store)) -> JournalService:
    return JournalService(store, request.app.state.config.journal)


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/categories")
async def list_categories(service: JournalService = Depends(journal_service)) -> list[str]:
    return service.categories


@router.post("/users")
async def create_user(body: UserCreate, store: Store = Depends(app_store)) -> dict:
    repo = UserRepository(store)
    if repo.get_by_email(body.email):
        raise HTTPException(status_code=409, detail="User already exists")

    try:
        user_id = repo.create(body.email, body.password)
    except UniqueConstraintError:
        raise HTTPException(status_code=409, detail="User already exists")
    except QueryExecutionError as e:
        logger.error("User registration error: %s", e)
        raise HTTPException(status_code=500, detail="An unexpected error occurred")
    return {"id": user_id, "email": body.email}


@router.get("/users/{user_id}/journals")
async def list_journals(
    user_id: int, category: str | None = None, service: JournalService = Depends(journal_service)
) -> list[dict]:
    """Entries of a user, newest first. ``category=All`` or none returns every entry."""
    try:
        entries = service.load(user_id, category)
    except QueryExecutionError as e:
        logger.error("Error loading journals: %s", e)
        raise HTTPException(status_code=500, detail="Failed to load journals")
    return [e.to_dict() for e in entries]


@router.post("/users/{user_id}/journals", status_code=201)
async def create_journal(
    user_id: int, body: JournalBody, service: JournalService = Depends(journal_service)
) -> dict:
    try:
        entry = service.save(user_id, body.image, body.description, body.category)
    except JournalValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ReferentialIntegrityError:
        raise HTTPException(status_code=404, detail="User not found")
    except QueryExecutionError as e:
        logger.error("Save error: %s", e)
        raise HTTPException(status_code=500, detail="An unexpected error occurred")
    return entry.to_dict()


@router.put("/users/{user_id}/journals/{entry_id}")
async def update_journal(
    user_id: int,
    entry_id: int,
    body: JournalBody,
    service: JournalService = Depends(journal_service),
) -> dict:
    try:
        entry = service.save(
            user_id, body.image, body.description, body.category, entry_id=entry_id
        )
    except JournalValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except JournalEntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except QueryExecutionError as e:
        logger.error("Update error: %s", e)
        raise HTTPException(status_code=500, detail="An unexpected error occurred")
    return entry.to_dict()


@router.delete("/users/{user_id}/journals/{entry_id}")
async def delete_journal(
    user_id: int, entry_id: int, service: JournalService = Depends(journal_service)
) -> dict:
    try:
        service.delete(user_id, entry_id)
    except JournalEntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except QueryExecutionError as e:
        logger.error("Delete error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete journal")
    return {"deleted": 1}
