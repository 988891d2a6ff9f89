"""
SQLAlchemy models - Import all for Alembic autogenerate
"""
from app.models.base import Base, TimestampMixin

# Import all models
from app.models.agent import Agent, QCAgent
from app.models.session import (
    QCSession,
    LeadStatus,
    BinaryScore,
    CategoryScore,
    ArchivedSession,
)
from app.models.library import ObjectionLibraryEntry, SkillLibraryEntry, TrainingExample

# Export all for easy imports
__all__ = [
    "Base",
    "TimestampMixin",
    "Agent",
    "QCAgent",
    "QCSession",
    "LeadStatus",
    "BinaryScore",
    "CategoryScore",
    "ArchivedSession",
    "ObjectionLibraryEntry",
    "SkillLibraryEntry",
    "TrainingExample",
]
