"""
Pydantic schemas for Agent endpoints
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict
from datetime import date, datetime


class AgentCreate(BaseModel):
    """Schema for creating a sales rep"""
    name: str = Field(..., min_length=1, max_length=255)


class AgentResponse(BaseModel):
    """Response schema for sales reps"""
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class QCAgentCreate(BaseModel):
    """Schema for creating a QC scorer"""
    name: str = Field(..., min_length=1, max_length=255)


class QCAgentResponse(BaseModel):
    """Response schema for QC scorers"""
    id: int
    name: str

    class Config:
        from_attributes = True


class AgentRollupResponse(BaseModel):
    """Roster row with derived performance"""
    agent_id: int
    name: str
    overall_score: float
    status: str
    scores: Dict[str, float]
    session_count: int
    last_evaluation_date: Optional[date] = None

    class Config:
        from_attributes = True
