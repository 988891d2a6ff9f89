"""
Pydantic schemas for QC Session endpoints
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import date, datetime

from app.core.rubric import BinaryAnswer
from app.models.session import LeadStatus

Rating = Optional[int]


class BinaryScores(BaseModel):
    """Yes / No / N/A answers"""
    intro: BinaryAnswer = BinaryAnswer.NOT_APPLICABLE
    first_ask: BinaryAnswer = BinaryAnswer.NOT_APPLICABLE
    property_condition: BinaryAnswer = BinaryAnswer.NOT_APPLICABLE

    class Config:
        from_attributes = True


class CategoryScores(BaseModel):
    """1-5 ratings (null = N/A), comments and skill tags"""
    bonding_rapport: Rating = Field(None, ge=1, le=5)
    bonding_rapport_comment: Optional[str] = None
    bonding_rapport_skills: Optional[List[str]] = None

    magic_problem: Rating = Field(None, ge=1, le=5)
    magic_problem_comment: Optional[str] = None
    magic_problem_skills: Optional[List[str]] = None

    second_ask: Rating = Field(None, ge=1, le=5)
    second_ask_comment: Optional[str] = None
    second_ask_skills: Optional[List[str]] = None

    objection_handling: Rating = Field(None, ge=1, le=5)
    objection_handling_comment: Optional[str] = None
    objection_handling_skills: Optional[List[str]] = None

    closing_offer_presentation: Rating = Field(None, ge=1, le=5)
    closing_offer_comment: Optional[str] = None
    closing_motivation: Rating = Field(None, ge=1, le=5)
    closing_motivation_comment: Optional[str] = None
    closing_objections: Rating = Field(None, ge=1, le=5)
    closing_objections_comment: Optional[str] = None
    closing_skills: Optional[List[str]] = None

    class Config:
        from_attributes = True


class SessionCreate(BaseModel):
    """Schema for scoring a call"""
    agent_id: int
    qc_agent_id: Optional[int] = None
    session_date: Optional[date] = None
    call_date: Optional[date] = None
    call_time: Optional[str] = Field(None, max_length=10)
    property_address: Optional[str] = Field(None, max_length=500)
    lead_status: LeadStatus = LeadStatus.ACTIVE
    final_comment: Optional[str] = None
    binary: BinaryScores = Field(default_factory=BinaryScores)
    categories: CategoryScores = Field(default_factory=CategoryScores)

    # Library picks
    objection_ids: List[int] = Field(default_factory=list)
    skill_ids: List[int] = Field(default_factory=list)
    new_objection: Optional[str] = Field(None, max_length=1000)


class SessionUpdate(BaseModel):
    """Schema for editing a scored call; omitted fields stay as they are"""
    agent_id: Optional[int] = None
    qc_agent_id: Optional[int] = None
    session_date: Optional[date] = None
    call_date: Optional[date] = None
    call_time: Optional[str] = Field(None, max_length=10)
    property_address: Optional[str] = Field(None, max_length=500)
    lead_status: Optional[LeadStatus] = None
    final_comment: Optional[str] = None
    binary: Optional[BinaryScores] = None
    categories: Optional[CategoryScores] = None

    @field_validator("agent_id", "session_date", "lead_status")
    @classmethod
    def not_null(cls, value):
        # These columns are NOT NULL; omit the field to keep the stored value
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class SessionResponse(BaseModel):
    """Joined session payload"""
    id: int
    agent_id: int
    qc_agent_id: Optional[int] = None
    session_date: date
    call_date: Optional[date] = None
    call_time: Optional[str] = None
    property_address: Optional[str] = None
    lead_status: LeadStatus
    final_comment: Optional[str] = None
    overall_score: float
    binary_score: Optional[BinaryScores] = None
    category_score: Optional[CategoryScores] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TrainingSuggestion(BaseModel):
    category: str
    score: float
    qc_comment: str


class SessionCreateResponse(BaseModel):
    """Created session plus training clip suggestions"""
    session: SessionResponse
    training_suggestions: List[TrainingSuggestion] = Field(default_factory=list)


class ArchivedSessionResponse(BaseModel):
    """Response schema for archived sessions"""
    id: int
    original_session_id: int
    agent_id: int
    qc_agent_id: Optional[int] = None
    overall_score: Optional[float] = None
    payload: Dict[str, Any]
    archived_at: datetime

    class Config:
        from_attributes = True
