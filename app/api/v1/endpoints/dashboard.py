"""
Dashboard API endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.analytics import DashboardResponse
from app.services.analytics_service import analytics_service

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    as_of: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Team average, team strength, top rep this week and most improved rep.
    `as_of` defaults to today.
    """
    return await analytics_service.dashboard(db, as_of)
