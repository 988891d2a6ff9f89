"""
Training example API endpoints
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.session import get_db
from app.models.library import TrainingExample
from app.schemas.library import TrainingExampleCreate, TrainingExampleResponse
from app.api.dependencies import require_admin
from app.api.v1.endpoints.agents import get_agent_or_404

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[TrainingExampleResponse])
async def list_training_examples(
    agent_id: Optional[int] = None,
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Saved clips, best scores first"""
    query = select(TrainingExample).order_by(TrainingExample.score.desc(), TrainingExample.id)
    if agent_id is not None:
        query = query.where(TrainingExample.agent_id == agent_id)
    if category:
        query = query.where(TrainingExample.category == category)
    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=TrainingExampleResponse, status_code=status.HTTP_201_CREATED)
async def create_training_example(
    example_data: TrainingExampleCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    await get_agent_or_404(db, example_data.agent_id)
    example = TrainingExample(**example_data.model_dump())
    db.add(example)
    await db.flush()
    logger.info(f"Saved training example {example.id} for agent {example.agent_id} ({example.category})")
    return example
