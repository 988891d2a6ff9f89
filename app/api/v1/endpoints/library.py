"""
Objection and skill library API endpoints
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.library import ObjectionLibraryEntry, SkillLibraryEntry
from app.schemas.library import ObjectionCreate, ObjectionResponse, SkillCreate, SkillResponse
from app.services.library_service import library_service
from app.api.dependencies import require_admin

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/objections", response_model=List[ObjectionResponse])
async def list_objections(category: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await library_service.list_entries(db, ObjectionLibraryEntry, category)


@router.post("/objections", response_model=ObjectionResponse, status_code=status.HTTP_201_CREATED)
async def create_objection(
    objection_data: ObjectionCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    return await library_service.add_objection(db, objection_data.objection_text, objection_data.category)


@router.post("/objections/{entry_id}/use", response_model=ObjectionResponse)
async def use_objection(
    entry_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    entry = await library_service.get_entry(db, ObjectionLibraryEntry, entry_id)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Objection not found"
        )
    return await library_service.increment_usage(db, entry)


@router.get("/skills", response_model=List[SkillResponse])
async def list_skills(category: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await library_service.list_entries(db, SkillLibraryEntry, category)


@router.post("/skills", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(
    skill_data: SkillCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    return await library_service.add_skill(db, skill_data.skill_text, skill_data.category)


@router.post("/skills/{entry_id}/use", response_model=SkillResponse)
async def use_skill(
    entry_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    entry = await library_service.get_entry(db, SkillLibraryEntry, entry_id)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Skill not found"
        )
    return await library_service.increment_usage(db, entry)
