"""
Archive API endpoints
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.session import ArchivedSession
from app.schemas.session import ArchivedSessionResponse, SessionResponse
from app.services.session_service import session_service
from app.api.dependencies import require_admin

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_archived_or_404(db: AsyncSession, archive_id: int) -> ArchivedSession:
    archived = await session_service.get_archived(db, archive_id)
    if not archived:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Archived session not found"
        )
    return archived


@router.get("", response_model=List[ArchivedSessionResponse])
async def list_archived(db: AsyncSession = Depends(get_db)):
    """Newest archived first"""
    return await session_service.list_archived(db)


@router.post("/{archive_id}/restore", response_model=SessionResponse)
async def restore_archived(
    archive_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Put an archived session back under a new id"""
    archived = await get_archived_or_404(db, archive_id)
    return await session_service.restore_session(db, archived)


@router.delete("/{archive_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_archived(
    archive_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    archived = await get_archived_or_404(db, archive_id)
    await session_service.delete_archived(db, archived)
