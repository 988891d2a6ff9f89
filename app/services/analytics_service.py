"""
Analytics Service
Loads agents and sessions and runs the scoring and insight engines over them
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.agent import Agent
from app.services.coaching_service import get_coaching_service
from app.services.dashboard_metrics import calculate_dashboard_metrics
from app.services.insight_service import CategoryAnalysis, analyze_agent, analyze_category
from app.services.scoring_service import AgentRollup, compute_agent_rollup, compute_roster, lead_status_counts
from app.services.session_service import session_service

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Derived, never stored, views of team and agent performance"""

    async def roster(self, db: AsyncSession) -> List[AgentRollup]:
        agents = await session_service.list_agents(db)
        snapshots = await session_service.load_snapshots(db)
        return compute_roster(agents, snapshots)

    async def dashboard(self, db: AsyncSession, as_of: Optional[date] = None) -> Dict[str, Any]:
        agents = await session_service.list_agents(db)
        snapshots = await session_service.load_snapshots(db)
        rollups = compute_roster(agents, snapshots)
        return calculate_dashboard_metrics(
            agents, rollups, snapshots, as_of=as_of, window_days=settings.TOP_REP_WINDOW_DAYS
        )

    async def agent_rollup(self, db: AsyncSession, agent: Agent) -> AgentRollup:
        snapshots = await session_service.load_snapshots(db, agent.id)
        return compute_agent_rollup(agent.id, agent.name, snapshots)

    async def agent_insights(self, db: AsyncSession, agent: Agent) -> Dict[str, Any]:
        """Rollup, per-category analyses and overall coaching comment"""
        snapshots = await session_service.load_snapshots(db, agent.id)
        rollup = compute_agent_rollup(agent.id, agent.name, snapshots)
        analyses = analyze_agent(agent.id, snapshots)
        comment = get_coaching_service().generate_overall_comment(agent.name, rollup.overall_score, analyses)
        logger.info(f"Generated insights for agent {agent.id} from {len(snapshots)} sessions")
        return {
            "rollup": rollup,
            "analyses": analyses,
            "overall_comment": comment,
            "lead_status_counts": lead_status_counts(snapshots),
        }

    async def category_insight(self, db: AsyncSession, agent: Agent, category: str) -> CategoryAnalysis:
        snapshots = await session_service.load_snapshots(db, agent.id)
        return analyze_category(category, agent.id, snapshots)


analytics_service = AnalyticsService()
