"""
Pydantic schemas for dashboard metrics and coaching insights
"""
from pydantic import BaseModel
from typing import Optional, List, Dict, Any
from datetime import date


class AgentRef(BaseModel):
    id: int
    name: str


class TeamStrength(BaseModel):
    category: Optional[str] = None
    score: float
    badge: str


class TopRep(BaseModel):
    agent: Optional[AgentRef] = None
    score: float
    session_count: int
    badge: str


class MostImproved(BaseModel):
    agent: Optional[AgentRef] = None
    improvement: float
    current: Optional[float] = None
    previous: Optional[float] = None
    badge: str


class DashboardResponse(BaseModel):
    """Homepage metrics"""
    team_average: float
    team_greatest_strength: TeamStrength
    top_rep_this_week: TopRep
    most_improved: MostImproved
    as_of: date


class CategoryAnalysisResponse(BaseModel):
    """Coaching analysis of one category"""
    category: str
    score: int
    consistency: float
    trend: str
    trend_strength: int
    interpretation: str
    session_count: int
    strengths: List[str]
    techniques: List[str]
    gaps: List[str]
    focus_areas: List[Dict[str, Any]]
    patterns: Dict[str, List[str]]
    projection: Optional[Dict[str, Any]] = None
    summary_text: str


class AgentInsightsResponse(BaseModel):
    """Deep-dive payload for one agent"""
    agent_id: int
    name: str
    overall_score: float
    status: str
    session_count: int
    lead_status_counts: Dict[str, int]
    overall_comment: str
    categories: Dict[str, CategoryAnalysisResponse]


class ViewResponse(BaseModel):
    """Resolved navigation state and its data"""
    view: str
    agent_id: Optional[int] = None
    data: Dict[str, Any]
