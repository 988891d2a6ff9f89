"""
View navigation endpoint
Resolves a dashboard view and returns the data it needs
"""
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.rubric import BinaryQuestion, Category
from app.core.views import (
    DashboardView,
    DeepDiveView,
    InvalidTransition,
    ReportingView,
    navigate,
)
from app.db.session import get_db
from app.models.library import ObjectionLibraryEntry, SkillLibraryEntry
from app.schemas.analytics import ViewResponse
from app.services.analytics_service import analytics_service
from app.services.library_service import library_service
from app.services.session_service import session_service
from app.api.v1.endpoints.agents import get_agent_or_404

router = APIRouter()


@router.get("/{view}", response_model=ViewResponse)
async def resolve_view(
    view: str,
    agent_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Navigate from the dashboard to `view`.
    Reporting and deep dive require `agent_id` (400 without one).
    """
    try:
        state = navigate(DashboardView(), view, agent_id)
    except InvalidTransition as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if isinstance(state, DashboardView):
        rollups = await analytics_service.roster(db)
        data = {
            "metrics": await analytics_service.dashboard(db),
            "roster": [asdict(r) for r in rollups],
        }
    elif isinstance(state, ReportingView):
        agent = await get_agent_or_404(db, state.agent_id)
        sessions = await session_service.list_sessions(db, agent.id)
        data = {
            "agent": asdict(await analytics_service.agent_rollup(db, agent)),
            "sessions": [
                {
                    "id": s.id,
                    "session_date": s.session_date,
                    "call_date": s.call_date,
                    "property_address": s.property_address,
                    "lead_status": s.lead_status.value,
                    "overall_score": s.overall_score,
                }
                for s in sessions
            ],
        }
    elif isinstance(state, DeepDiveView):
        agent = await get_agent_or_404(db, state.agent_id)
        insights = await analytics_service.agent_insights(db, agent)
        data = {
            "agent": asdict(insights["rollup"]),
            "overall_comment": insights["overall_comment"],
            "lead_status_counts": insights["lead_status_counts"],
            "categories": {name: a.to_dict() for name, a in insights["analyses"].items()},
        }
    else:
        if state.agent_id is not None:
            await get_agent_or_404(db, state.agent_id)
        data = {
            "binary_questions": [{"key": q.value, "text": q.text} for q in BinaryQuestion],
            "categories": [
                {"name": c.display_name, "slug": c.slug, "rating_keys": [k.value for k in c.rating_keys]}
                for c in Category
            ],
            "objections": [
                {"id": e.id, "text": e.objection_text, "usage_count": e.usage_count}
                for e in await library_service.list_entries(db, ObjectionLibraryEntry)
            ],
            "skills": [
                {"id": e.id, "text": e.skill_text, "category": e.category, "usage_count": e.usage_count}
                for e in await library_service.list_entries(db, SkillLibraryEntry)
            ],
        }

    return ViewResponse(view=state.name, agent_id=getattr(state, "agent_id", None), data=data)
