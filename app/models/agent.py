"""
Sales reps and QC scorers
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin


class Agent(Base, TimestampMixin):
    """
    Sales rep whose calls are scored.
    Performance rollups are derived from sessions on every roster load, never stored.
    """
    __tablename__ = "agents"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    sessions = relationship("QCSession", back_populates="agent", cascade="all, delete-orphan")


class QCAgent(Base, TimestampMixin):
    """QC scorer attributed on sessions"""
    __tablename__ = "qc_agents"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    sessions = relationship("QCSession", back_populates="qc_agent")
