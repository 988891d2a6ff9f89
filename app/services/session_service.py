"""
QC session persistence
Create, edit, archive and restore sessions; overall_score is recomputed on every write
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.rubric import BinaryAnswer, BinaryQuestion
from app.models.agent import Agent
from app.models.session import ArchivedSession, BinaryScore, CategoryScore, LeadStatus, QCSession
from app.schemas.session import SessionCreate, SessionUpdate
from app.services.scoring_service import compute_overall_score
from app.services.session_snapshot import ScoredSession

logger = logging.getLogger(__name__)

SESSION_FIELDS = (
    "agent_id",
    "qc_agent_id",
    "session_date",
    "call_date",
    "call_time",
    "property_address",
    "lead_status",
    "final_comment",
)
DATE_FIELDS = ("session_date", "call_date")
BOOKKEEPING_COLUMNS = ("id", "session_id", "created_at", "updated_at")


def category_columns() -> List[str]:
    """Rating, comment and skill columns of category_scores"""
    return [c.name for c in CategoryScore.__table__.columns if c.name not in BOOKKEEPING_COLUMNS]


def _json_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value


def flatten_session(session: QCSession) -> Dict[str, Any]:
    """JSON-safe copy of a session and its answer rows"""
    payload: Dict[str, Any] = {name: _json_value(getattr(session, name)) for name in SESSION_FIELDS}
    payload["overall_score"] = session.overall_score
    payload["binary"] = {
        q.value: _json_value(getattr(session.binary_score, q.value)) if session.binary_score else None
        for q in BinaryQuestion
    }
    payload["categories"] = {
        name: getattr(session.category_score, name) if session.category_score else None
        for name in category_columns()
    }
    return payload


def unflatten_session(payload: Dict[str, Any]) -> QCSession:
    """New, unsaved session built from a flattened payload"""
    fields = {name: payload.get(name) for name in SESSION_FIELDS}
    for name in DATE_FIELDS:
        if isinstance(fields[name], str):
            fields[name] = date.fromisoformat(fields[name][:10])
    fields["lead_status"] = LeadStatus(fields["lead_status"]) if fields["lead_status"] else LeadStatus.ACTIVE
    fields["session_date"] = fields["session_date"] or date.today()

    binary = payload.get("binary") or {}
    categories = payload.get("categories") or {}
    session = QCSession(**fields)
    session.binary_score = BinaryScore(
        **{q.value: BinaryAnswer.normalize(binary.get(q.value)) for q in BinaryQuestion}
    )
    session.category_score = CategoryScore(
        **{name: categories.get(name) for name in category_columns() if name in categories}
    )
    return session


def recompute_score(session: QCSession) -> float:
    """Refresh the cached overall_score from the session's answer rows"""
    snapshot = ScoredSession.from_model(session)
    session.overall_score = compute_overall_score(snapshot.binary, snapshot.ratings)
    return session.overall_score


class SessionService:
    """Service for QC session reads and writes"""

    async def list_sessions(self, db: AsyncSession, agent_id: Optional[int] = None) -> List[QCSession]:
        """Sessions with answer rows loaded, in insertion order"""
        query = (
            select(QCSession)
            .options(selectinload(QCSession.binary_score), selectinload(QCSession.category_score))
            .order_by(QCSession.id)
        )
        if agent_id is not None:
            query = query.where(QCSession.agent_id == agent_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def load_snapshots(self, db: AsyncSession, agent_id: Optional[int] = None) -> List[ScoredSession]:
        """Engine input for every (or one agent's) session"""
        return [ScoredSession.from_model(s) for s in await self.list_sessions(db, agent_id)]

    async def get_session(self, db: AsyncSession, session_id: int) -> Optional[QCSession]:
        result = await db.execute(
            select(QCSession)
            .options(selectinload(QCSession.binary_score), selectinload(QCSession.category_score))
            .where(QCSession.id == session_id)
        )
        return result.scalar_one_or_none()

    async def list_agents(self, db: AsyncSession) -> List[Agent]:
        result = await db.execute(select(Agent).order_by(Agent.id))
        return list(result.scalars().all())

    async def create_session(self, db: AsyncSession, data: SessionCreate) -> QCSession:
        """Insert the session with its binary and category rows"""
        session = QCSession(
            agent_id=data.agent_id,
            qc_agent_id=data.qc_agent_id,
            session_date=data.session_date or date.today(),
            call_date=data.call_date,
            call_time=data.call_time,
            property_address=data.property_address,
            lead_status=data.lead_status,
            final_comment=data.final_comment,
        )
        session.binary_score = BinaryScore(**data.binary.model_dump())
        session.category_score = CategoryScore(**data.categories.model_dump())
        recompute_score(session)

        db.add(session)
        await db.flush()
        logger.info(f"Created QC session {session.id} for agent {session.agent_id} (score {session.overall_score})")
        return await self.get_session(db, session.id)

    async def update_session(self, db: AsyncSession, session: QCSession, data: SessionUpdate) -> QCSession:
        """Apply an edit and overwrite the cached score"""
        changes = data.model_dump(exclude_unset=True, exclude={"binary", "categories"})
        for name, value in changes.items():
            setattr(session, name, value)

        if data.binary is not None:
            if session.binary_score is None:
                session.binary_score = BinaryScore()
            for name, value in data.binary.model_dump(exclude_unset=True).items():
                setattr(session.binary_score, name, value)

        if data.categories is not None:
            if session.category_score is None:
                session.category_score = CategoryScore()
            for name, value in data.categories.model_dump(exclude_unset=True).items():
                setattr(session.category_score, name, value)

        recompute_score(session)
        await db.flush()
        logger.info(f"Updated QC session {session.id} (score {session.overall_score})")
        return await self.get_session(db, session.id)

    async def delete_session(self, db: AsyncSession, session: QCSession) -> None:
        await db.delete(session)
        await db.flush()
        logger.info(f"Deleted QC session {session.id}")

    async def archive_session(self, db: AsyncSession, session: QCSession) -> ArchivedSession:
        """Move a session into the archive"""
        archived = ArchivedSession(
            original_session_id=session.id,
            agent_id=session.agent_id,
            qc_agent_id=session.qc_agent_id,
            overall_score=session.overall_score,
            payload=flatten_session(session),
        )
        db.add(archived)
        await db.delete(session)
        await db.flush()
        logger.info(f"Archived QC session {session.id} as archive entry {archived.id}")
        return archived

    async def list_archived(self, db: AsyncSession) -> List[ArchivedSession]:
        result = await db.execute(select(ArchivedSession).order_by(ArchivedSession.archived_at.desc()))
        return list(result.scalars().all())

    async def get_archived(self, db: AsyncSession, archive_id: int) -> Optional[ArchivedSession]:
        result = await db.execute(select(ArchivedSession).where(ArchivedSession.id == archive_id))
        return result.scalar_one_or_none()

    async def restore_session(self, db: AsyncSession, archived: ArchivedSession) -> QCSession:
        """Recreate the session under a new id and drop the archive row"""
        session = unflatten_session(archived.payload)
        recompute_score(session)
        db.add(session)
        await db.delete(archived)
        await db.flush()
        logger.info(
            f"Restored archive entry {archived.id} as QC session {session.id} "
            f"(was {archived.original_session_id})"
        )
        return await self.get_session(db, session.id)

    async def delete_archived(self, db: AsyncSession, archived: ArchivedSession) -> None:
        await db.delete(archived)
        await db.flush()
        logger.info(f"Permanently deleted archive entry {archived.id}")


session_service = SessionService()
