"""
Pydantic schemas for objection/skill libraries and training examples
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class ObjectionCreate(BaseModel):
    objection_text: str = Field(..., min_length=1, max_length=1000)
    category: str = Field(default="custom", max_length=100)


class ObjectionResponse(BaseModel):
    id: int
    objection_text: str
    category: str
    usage_count: int

    class Config:
        from_attributes = True


class SkillCreate(BaseModel):
    skill_text: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)


class SkillResponse(BaseModel):
    id: int
    skill_text: str
    category: str
    usage_count: int

    class Config:
        from_attributes = True


class TrainingExampleCreate(BaseModel):
    """Schema for saving a training clip"""
    agent_id: int
    category: str = Field(..., min_length=1, max_length=100)
    score: float = Field(..., ge=1, le=5)
    qc_comment: Optional[str] = None
    property_address: Optional[str] = Field(None, max_length=500)
    call_date: Optional[date] = None
    call_time: Optional[str] = Field(None, max_length=10)
    timestamp_start: Optional[str] = Field(None, max_length=20)


class TrainingExampleResponse(BaseModel):
    id: int
    agent_id: int
    category: str
    score: float
    qc_comment: Optional[str] = None
    property_address: Optional[str] = None
    call_date: Optional[date] = None
    call_time: Optional[str] = None
    timestamp_start: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
