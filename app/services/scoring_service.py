"""
Score Aggregation Engine
Single-session overall score and per-agent roster rollups
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from app.core.rubric import (
    BINARY_WEIGHT,
    CATEGORY_WEIGHT,
    CLOSING_WEIGHTS,
    MAX_RATING,
    ROLLUP_CATEGORIES,
    STANDALONE_RATING_KEYS,
    BinaryAnswer,
    BinaryQuestion,
    Category,
    coerce_rating,
    round_half_up,
)
from app.services.session_snapshot import ScoredSession

logger = logging.getLogger(__name__)


def closing_synthetic(ratings: Mapping[str, Any]) -> Optional[float]:
    """
    Blend the three closing ratings into one 1-5 value.
    Weights (0.4/0.4/0.2) are renormalised over the ratings that are present;
    None when no closing rating is present.
    """
    weighted_sum = 0.0
    total_weight = 0.0
    for key, weight in CLOSING_WEIGHTS.items():
        value = coerce_rating(ratings.get(key.value))
        if value is None:
            continue
        weighted_sum += value * weight
        total_weight += weight

    if total_weight == 0:
        return None
    return weighted_sum / total_weight


def category_value(category: Category, ratings: Mapping[str, Any]) -> Optional[float]:
    """1-5 value of a category on one session, None when not rated"""
    if category.is_closing:
        return closing_synthetic(ratings)
    return coerce_rating(ratings.get(category.rating_keys[0].value))


def binary_percentage(binary: Mapping[str, Any]) -> float:
    """Share of Yes among answered questions; 100 when everything is N/A"""
    answers = [BinaryAnswer.normalize(binary.get(q.value)) for q in BinaryQuestion]
    answered = [a for a in answers if a is not BinaryAnswer.NOT_APPLICABLE]
    if not answered:
        return 100.0
    yes_count = sum(1 for a in answered if a is BinaryAnswer.YES)
    return yes_count / len(answered) * 100


def category_average(ratings: Mapping[str, Any]) -> float:
    """Mean of the standalone ratings plus the closing blend (0 when nothing is rated)"""
    values: List[float] = []
    for key in STANDALONE_RATING_KEYS:
        value = coerce_rating(ratings.get(key.value))
        if value is not None:
            values.append(value)

    closing = closing_synthetic(ratings)
    if closing is not None:
        values.append(closing)

    if not values:
        return 0.0
    return sum(values) / len(values)


def score_breakdown(binary: Mapping[str, Any], ratings: Mapping[str, Any]) -> Dict[str, float]:
    """Components of the overall score, unrounded"""
    binary_pct = binary_percentage(binary)
    category_pct = category_average(ratings) / MAX_RATING * 100
    binary_weighted = binary_pct * BINARY_WEIGHT
    category_weighted = category_pct * CATEGORY_WEIGHT
    return {
        "binary_percentage": binary_pct,
        "binary_weighted": binary_weighted,
        "category_percentage": category_pct,
        "category_weighted": category_weighted,
        "overall": binary_weighted + category_weighted,
    }


def compute_overall_score(binary: Mapping[str, Any], ratings: Mapping[str, Any]) -> float:
    """
    Overall 0-100 score for one session, rounded to one decimal.

    Binary questions carry 30% (Yes share of answered questions), the rated
    categories 70% (mean of the 1-5 values as a percentage). A session with
    everything N/A scores 30.0 from the binary part alone.
    """
    return round_half_up(score_breakdown(binary, ratings)["overall"], 1)


def status_tier(score: float) -> str:
    """Roster colour for a 0-100 score"""
    if score >= 70:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


@dataclass
class AgentRollup:
    """Derived per-agent performance shown on the roster"""
    agent_id: int
    name: str
    overall_score: float = 0.0
    status: str = "red"
    scores: Dict[str, float] = field(default_factory=dict)
    session_count: int = 0
    last_evaluation_date: Optional[date] = None


def compute_agent_rollup(agent_id: int, name: str, sessions: Sequence[ScoredSession]) -> AgentRollup:
    """
    Roll an agent's sessions up into per-category percentages.

    Each rollup category averages only the sessions where it was rated.
    The overall score is the mean of the categories that have data. The last
    evaluation date is the session_date of the last session in the given
    order; the store returns sessions in insertion order.
    """
    percentages: Dict[Category, float] = {}
    for category in ROLLUP_CATEGORIES:
        total = 0.0
        count = 0
        for session in sessions:
            value = category_value(category, session.ratings)
            if value is None:
                continue
            total += value
            count += 1
        if count > 0:
            percentages[category] = (total / count) / MAX_RATING * 100

    overall = sum(percentages.values()) / len(percentages) if percentages else 0.0

    return AgentRollup(
        agent_id=agent_id,
        name=name,
        overall_score=round_half_up(overall, 1),
        status=status_tier(overall),
        scores={
            category.display_name: round_half_up(percentages.get(category, 0.0))
            for category in ROLLUP_CATEGORIES
        },
        session_count=len(sessions),
        last_evaluation_date=sessions[-1].session_date if sessions else None,
    )


def compute_roster(agents: Iterable[Any], sessions: Sequence[ScoredSession]) -> List[AgentRollup]:
    """Rollups for every agent (objects with id and name) in roster order"""
    by_agent: Dict[int, List[ScoredSession]] = {}
    for session in sessions:
        by_agent.setdefault(session.agent_id, []).append(session)

    rollups = [
        compute_agent_rollup(agent.id, agent.name, by_agent.get(agent.id, []))
        for agent in agents
    ]
    logger.debug(f"Computed rollups for {len(rollups)} agents from {len(sessions)} sessions")
    return rollups


def lead_status_counts(sessions: Iterable[ScoredSession]) -> Dict[str, int]:
    """Active / Pending / Dead call counts for the deep-dive header"""
    counts = {"Active": 0, "Pending": 0, "Dead": 0}
    for session in sessions:
        if session.lead_status in counts:
            counts[session.lead_status] += 1
    return counts
