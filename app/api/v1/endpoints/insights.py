"""
Coaching insight API endpoints
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.analytics import AgentInsightsResponse, CategoryAnalysisResponse
from app.services.analytics_service import analytics_service
from app.services.report_service import get_report_service
from app.api.v1.endpoints.agents import get_agent_or_404

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/agents/{agent_id}/insights", response_model=AgentInsightsResponse)
async def get_agent_insights(agent_id: int, db: AsyncSession = Depends(get_db)):
    """Per-category coaching analyses plus the overall comment"""
    agent = await get_agent_or_404(db, agent_id)
    insights = await analytics_service.agent_insights(db, agent)
    rollup = insights["rollup"]

    return AgentInsightsResponse(
        agent_id=agent.id,
        name=agent.name,
        overall_score=rollup.overall_score,
        status=rollup.status,
        session_count=rollup.session_count,
        lead_status_counts=insights["lead_status_counts"],
        overall_comment=insights["overall_comment"],
        categories={name: a.to_dict() for name, a in insights["analyses"].items()},
    )


@router.get("/agents/{agent_id}/insights/{category}", response_model=CategoryAnalysisResponse)
async def get_category_insight(agent_id: int, category: str, db: AsyncSession = Depends(get_db)):
    """
    One category by display name or slug (e.g. `closing`, `Second Ask`).
    Unknown categories return the empty analysis.
    """
    agent = await get_agent_or_404(db, agent_id)
    analysis = await analytics_service.category_insight(db, agent, category)
    return analysis.to_dict()


@router.get("/agents/{agent_id}/report.pdf")
async def download_agent_report(agent_id: int, db: AsyncSession = Depends(get_db)):
    """Coaching report as a PDF download"""
    agent = await get_agent_or_404(db, agent_id)
    insights = await analytics_service.agent_insights(db, agent)

    pdf_bytes = get_report_service().generate_agent_report(
        rollup=insights["rollup"],
        analyses=insights["analyses"],
        overall_comment=insights["overall_comment"],
        lead_counts=insights["lead_status_counts"],
    )
    filename = f"qc_report_agent_{agent.id}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
