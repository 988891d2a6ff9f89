"""
Reference libraries picked from while scoring, and saved training clips
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Float, Date
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin


class ObjectionLibraryEntry(Base, TimestampMixin):
    """Seller objection phrase with a usage counter"""
    __tablename__ = "objections_library"

    id = Column(Integer, primary_key=True, index=True)
    objection_text = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, default="custom")
    usage_count = Column(Integer, nullable=False, default=0)


class SkillLibraryEntry(Base, TimestampMixin):
    """Skill tag with a usage counter, grouped by rating category"""
    __tablename__ = "skills_library"

    id = Column(Integer, primary_key=True, index=True)
    skill_text = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    usage_count = Column(Integer, nullable=False, default=0)


class TrainingExample(Base, TimestampMixin):
    """
    High-scoring call moment saved for training
    """
    __tablename__ = "training_examples"

    id = Column(Integer, primary_key=True, index=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True)

    category = Column(String(100), nullable=False)
    score = Column(Float, nullable=False)
    qc_comment = Column(Text, nullable=True)

    property_address = Column(String(500), nullable=True)
    call_date = Column(Date, nullable=True)
    call_time = Column(String(10), nullable=True)
    timestamp_start = Column(String(20), nullable=True)  # mm:ss into the recording

    # Relationships
    agent = relationship("Agent")
