"""
Builders for engine-level sessions and API payloads
"""
from datetime import date
from typing import Any, Dict, Optional

from app.services.session_snapshot import ScoredSession


def make_session(
    agent_id: int = 1,
    day: Optional[date] = None,
    binary: Optional[Dict[str, Any]] = None,
    overall_score: Optional[float] = None,
    lead_status: Optional[str] = None,
    **ratings: Any,
) -> ScoredSession:
    """Engine-level session for unit tests"""
    return ScoredSession(
        agent_id=agent_id,
        binary=binary or {},
        ratings=ratings,
        session_date=day,
        call_date=day,
        overall_score=overall_score,
        lead_status=lead_status,
    )


def session_payload(agent_id: int, **overrides: Any) -> Dict[str, Any]:
    """JSON body for POST /sessions"""
    payload = {
        "agent_id": agent_id,
        "session_date": "2026-03-02",
        "call_date": "2026-03-02",
        "call_time": "10:30",
        "property_address": "12 Elm Street",
        "lead_status": "Active",
        "binary": {"intro": "yes", "first_ask": "yes", "property_condition": "no"},
        "categories": {
            "bonding_rapport": 4,
            "bonding_rapport_comment": "Great rapport, asked about the family and listened well.",
            "magic_problem": 3,
            "second_ask": 5,
            "closing_offer_presentation": 4,
            "closing_motivation": 4,
            "closing_objections": 2,
        },
    }
    payload.update(overrides)
    return payload
