"""
Agent API endpoints
Sales rep roster with derived performance, and QC scorers
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.session import get_db
from app.models.agent import Agent, QCAgent
from app.schemas.agent import (
    AgentCreate,
    AgentResponse,
    AgentRollupResponse,
    QCAgentCreate,
    QCAgentResponse,
)
from app.services.analytics_service import analytics_service
from app.api.dependencies import require_admin

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_agent_or_404(db: AsyncSession, agent_id: int) -> Agent:
    result = await db.execute(select(Agent).where(Agent.id == agent_id))
    agent = result.scalar_one_or_none()
    if not agent:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Agent not found"
        )
    return agent


@router.get("/agents", response_model=List[AgentRollupResponse])
async def list_agents(db: AsyncSession = Depends(get_db)):
    """
    Roster with rollups.
    Scores are recomputed from sessions on every call.
    """
    return await analytics_service.roster(db)


@router.post("/agents", response_model=AgentResponse, status_code=status.HTTP_201_CREATED)
async def create_agent(
    agent_data: AgentCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    agent = Agent(name=agent_data.name.strip())
    db.add(agent)
    await db.flush()
    logger.info(f"Created agent {agent.id} ({agent.name})")
    return agent


@router.get("/agents/{agent_id}", response_model=AgentRollupResponse)
async def get_agent(agent_id: int, db: AsyncSession = Depends(get_db)):
    agent = await get_agent_or_404(db, agent_id)
    return await analytics_service.agent_rollup(db, agent)


@router.get("/qc-agents", response_model=List[QCAgentResponse])
async def list_qc_agents(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(QCAgent).order_by(QCAgent.name))
    return result.scalars().all()


@router.post("/qc-agents", response_model=QCAgentResponse, status_code=status.HTTP_201_CREATED)
async def create_qc_agent(
    qc_agent_data: QCAgentCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(require_admin),
):
    qc_agent = QCAgent(name=qc_agent_data.name.strip())
    db.add(qc_agent)
    await db.flush()
    logger.info(f"Created QC agent {qc_agent.id} ({qc_agent.name})")
    return qc_agent
