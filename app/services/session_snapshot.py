"""
In-memory view of a QC session used by the scoring and insight engines.
Engines never touch the ORM; endpoints convert loaded rows with from_model().
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from app.core.rubric import BinaryQuestion, RatingKey, coerce_rating


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


@dataclass
class ScoredSession:
    """Scores and comments of one session, detached from the store"""
    agent_id: int
    binary: Dict[str, Any] = field(default_factory=dict)
    ratings: Dict[str, Any] = field(default_factory=dict)
    session_date: Optional[date] = None
    call_date: Optional[date] = None
    overall_score: Optional[float] = None
    lead_status: Optional[str] = None
    id: Optional[int] = None

    @property
    def date(self) -> Optional[date]:
        """Call date, falling back to the day it was scored"""
        return _as_date(self.call_date) or _as_date(self.session_date)

    def rating(self, key: RatingKey) -> Optional[float]:
        return coerce_rating(self.ratings.get(key.value))

    def comment(self, key: RatingKey) -> str:
        text = self.ratings.get(key.comment_key)
        return text.strip() if isinstance(text, str) else ""

    def rating_values(self) -> List[float]:
        """Every present rating on the session"""
        values = [self.rating(key) for key in RatingKey]
        return [value for value in values if value is not None]

    @classmethod
    def from_model(cls, session) -> "ScoredSession":
        """Build from a QCSession with binary_score and category_score loaded."""
        binary: Dict[str, Any] = {}
        if session.binary_score is not None:
            binary = {q.value: getattr(session.binary_score, q.value) for q in BinaryQuestion}

        ratings: Dict[str, Any] = {}
        if session.category_score is not None:
            for key in RatingKey:
                ratings[key.value] = getattr(session.category_score, key.value)
                ratings[key.comment_key] = getattr(session.category_score, key.comment_key)

        lead_status = session.lead_status
        return cls(
            id=session.id,
            agent_id=session.agent_id,
            binary=binary,
            ratings=ratings,
            session_date=session.session_date,
            call_date=session.call_date,
            overall_score=session.overall_score,
            lead_status=lead_status.value if hasattr(lead_status, "value") else lead_status,
        )
