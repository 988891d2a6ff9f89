"""
QC session models - one scored call evaluation and its answer rows
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Float, Date, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from app.core.rubric import BinaryAnswer
from app.models.base import Base, TimestampMixin


class LeadStatus(str, enum.Enum):
    """Lead status recorded on the call"""
    ACTIVE = "Active"
    PENDING = "Pending"
    DEAD = "Dead"


class QCSession(Base, TimestampMixin):
    """
    QC evaluation of one call - main entity.
    overall_score is a cached value; every write path recomputes it.
    """
    __tablename__ = "qc_sessions"
    # Never hand out an id again after archive or delete
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)
    qc_agent_id = Column(Integer, ForeignKey("qc_agents.id", ondelete="SET NULL"), nullable=True)

    # Call details
    session_date = Column(Date, nullable=False)  # Day the QC form was submitted
    call_date = Column(Date, nullable=True)
    call_time = Column(String(10), nullable=True)  # HH:MM
    property_address = Column(String(500), nullable=True)
    lead_status = Column(SQLEnum(LeadStatus), default=LeadStatus.ACTIVE, nullable=False)
    final_comment = Column(Text, nullable=True)

    # Cached 0-100 score
    overall_score = Column(Float, nullable=False, default=0.0)

    # Relationships
    agent = relationship("Agent", back_populates="sessions")
    qc_agent = relationship("QCAgent", back_populates="sessions")
    binary_score = relationship("BinaryScore", back_populates="session", uselist=False, cascade="all, delete-orphan")
    category_score = relationship("CategoryScore", back_populates="session", uselist=False, cascade="all, delete-orphan")


class BinaryScore(Base, TimestampMixin):
    """
    Yes/No/N-A answers for the three checklist questions
    """
    __tablename__ = "binary_scores"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("qc_sessions.id", ondelete="CASCADE"), nullable=False, unique=True)

    intro = Column(SQLEnum(BinaryAnswer), default=BinaryAnswer.NOT_APPLICABLE, nullable=False)
    first_ask = Column(SQLEnum(BinaryAnswer), default=BinaryAnswer.NOT_APPLICABLE, nullable=False)
    property_condition = Column(SQLEnum(BinaryAnswer), default=BinaryAnswer.NOT_APPLICABLE, nullable=False)

    # Relationships
    session = relationship("QCSession", back_populates="binary_score")


class CategoryScore(Base, TimestampMixin):
    """
    1-5 ratings (NULL = N/A), QC comments and selected skill tags
    """
    __tablename__ = "category_scores"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("qc_sessions.id", ondelete="CASCADE"), nullable=False, unique=True)

    bonding_rapport = Column(Integer, nullable=True)
    bonding_rapport_comment = Column(Text, nullable=True)
    bonding_rapport_skills = Column(JSON, nullable=True)

    magic_problem = Column(Integer, nullable=True)
    magic_problem_comment = Column(Text, nullable=True)
    magic_problem_skills = Column(JSON, nullable=True)

    second_ask = Column(Integer, nullable=True)
    second_ask_comment = Column(Text, nullable=True)
    second_ask_skills = Column(JSON, nullable=True)

    objection_handling = Column(Integer, nullable=True)
    objection_handling_comment = Column(Text, nullable=True)
    objection_handling_skills = Column(JSON, nullable=True)

    # Closing is rated in three weighted parts
    closing_offer_presentation = Column(Integer, nullable=True)
    closing_offer_comment = Column(Text, nullable=True)
    closing_motivation = Column(Integer, nullable=True)
    closing_motivation_comment = Column(Text, nullable=True)
    closing_objections = Column(Integer, nullable=True)
    closing_objections_comment = Column(Text, nullable=True)
    closing_skills = Column(JSON, nullable=True)

    # Relationships
    session = relationship("QCSession", back_populates="category_score")


class ArchivedSession(Base):
    """
    Frozen copy of a deleted session.
    payload holds the session fields plus flattened binary/category rows.
    """
    __tablename__ = "archived_sessions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    original_session_id = Column(Integer, nullable=False)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)
    qc_agent_id = Column(Integer, ForeignKey("qc_agents.id", ondelete="SET NULL"), nullable=True)
    overall_score = Column(Float, nullable=True)
    payload = Column(JSON, nullable=False)
    archived_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    agent = relationship("Agent")
