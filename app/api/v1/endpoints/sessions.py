"""
Session API endpoints
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.library import ObjectionLibraryEntry, SkillLibraryEntry
from app.models.session import QCSession
from app.schemas.session import (
    ArchivedSessionResponse,
    SessionCreate,
    SessionCreateResponse,
    SessionResponse,
    SessionUpdate,
)
from app.services.coaching_service import get_coaching_service
from app.services.library_service import library_service
from app.services.session_service import session_service
from app.services.session_snapshot import ScoredSession
from app.api.dependencies import require_admin
from app.api.v1.endpoints.agents import get_agent_or_404

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_session_or_404(db: AsyncSession, session_id: int) -> QCSession:
    session = await session_service.get_session(db, session_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found"
        )
    return session


@router.post("", response_model=SessionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_data: SessionCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    """
    Score a call.
    Stores the session with its answer rows, bumps the picked library
    entries and returns training clip suggestions.
    """
    await get_agent_or_404(db, session_data.agent_id)

    session = await session_service.create_session(db, session_data)

    await library_service.increment_many(db, ObjectionLibraryEntry, session_data.objection_ids)
    await library_service.increment_many(db, SkillLibraryEntry, session_data.skill_ids)
    if session_data.new_objection and session_data.new_objection.strip():
        await library_service.add_objection(db, session_data.new_objection)

    snapshot = ScoredSession.from_model(session)
    suggestions = get_coaching_service().suggest_training_examples(snapshot.ratings)

    return SessionCreateResponse(
        session=SessionResponse.model_validate(session),
        training_suggestions=suggestions,
    )


@router.get("", response_model=List[SessionResponse])
async def list_sessions(
    agent_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    """List sessions, optionally for one agent"""
    return await session_service.list_sessions(db, agent_id)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: int, db: AsyncSession = Depends(get_db)):
    return await get_session_or_404(db, session_id)


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: int,
    session_data: SessionUpdate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Edit a session; the overall score is recomputed and overwritten"""
    session = await get_session_or_404(db, session_id)
    if session_data.agent_id is not None:
        await get_agent_or_404(db, session_data.agent_id)
    return await session_service.update_session(db, session, session_data)


@router.post("/{session_id}/archive", response_model=ArchivedSessionResponse)
async def archive_session(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    session = await get_session_or_404(db, session_id)
    return await session_service.archive_session(db, session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Hard delete without archiving"""
    session = await get_session_or_404(db, session_id)
    await session_service.delete_session(db, session)
