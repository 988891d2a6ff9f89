"""
Team dashboard metrics
Team average, team strength, top rep this week and most improved rep
"""
import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from app.core.rubric import MAX_RATING, ROLLUP_CATEGORIES, round_half_up
from app.services.recency import Observation, weighted_average
from app.services.scoring_service import AgentRollup, category_value
from app.services.session_snapshot import ScoredSession

logger = logging.getLogger(__name__)

TOP_REP_WINDOW_DAYS = 7


def _as_percentage(weighted: float) -> float:
    return weighted / MAX_RATING * 100


def _agent_ref(agent: Any) -> Dict[str, Any]:
    return {"id": agent.id, "name": agent.name}


def team_average(rollups: Sequence[AgentRollup]) -> float:
    """Mean of every agent's overall score"""
    if not rollups:
        return 0.0
    return round_half_up(sum(r.overall_score for r in rollups) / len(rollups), 1)


def team_greatest_strength(sessions: Iterable[ScoredSession]) -> Dict[str, Any]:
    """Rollup category with the best recency-weighted average across all sessions"""
    sessions = list(sessions)
    best_category = None
    best_score = 0.0

    for category in ROLLUP_CATEGORIES:
        observations = []
        for session in sessions:
            value = category_value(category, session.ratings)
            if value is not None:
                observations.append(Observation(value, session.date))
        if not observations:
            continue

        score = round_half_up(_as_percentage(weighted_average(observations)), 1)
        if score > best_score:
            best_category = category
            best_score = score

    return {
        "category": best_category.display_name if best_category else None,
        "score": best_score,
        "badge": "Team Superpower",
    }


def top_rep_this_week(
    agents: Sequence[Any],
    sessions: Iterable[ScoredSession],
    as_of: Optional[date] = None,
    window_days: int = TOP_REP_WINDOW_DAYS,
) -> Dict[str, Any]:
    """
    Agent with the best recency-weighted rating over the last `window_days`.
    Every present rating of every session in the window is one observation.
    Ties go to the agent with more sessions in the window.
    """
    as_of = as_of or date.today()
    window_start = as_of - timedelta(days=window_days)
    recent = [s for s in sessions if s.date is not None and window_start <= s.date <= as_of]

    candidates: List[Tuple[Any, float, int]] = []
    for agent in agents:
        agent_sessions = [s for s in recent if s.agent_id == agent.id]
        observations = [
            Observation(value, s.date)
            for s in agent_sessions
            for value in s.rating_values()
        ]
        if not observations:
            continue
        score = round_half_up(_as_percentage(weighted_average(observations)), 1)
        candidates.append((agent, score, len(agent_sessions)))

    if not candidates:
        return {"agent": None, "score": 0.0, "session_count": 0, "badge": "No data this week"}

    # stable sort keeps roster order on full ties
    candidates.sort(key=lambda c: (-c[1], -c[2]))
    agent, score, session_count = candidates[0]
    return {
        "agent": _agent_ref(agent),
        "score": score,
        "session_count": session_count,
        "badge": "Top Performer",
    }


def business_week(day: date) -> Tuple[date, date]:
    """Monday..Friday of the week containing `day` (weekends map to the week just ended)"""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=4)


def most_improved(
    agents: Sequence[Any],
    sessions: Iterable[ScoredSession],
    as_of: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Largest week-over-week gain in recency-weighted overall_score.
    Compares the current Monday-Friday business week with the one before.
    """
    as_of = as_of or date.today()
    current_start, current_end = business_week(as_of)
    previous_start = current_start - timedelta(days=7)
    previous_end = current_end - timedelta(days=7)
    sessions = [s for s in sessions if s.date is not None and s.overall_score is not None]

    best = None
    for agent in agents:
        current = [
            Observation(s.overall_score, s.date)
            for s in sessions
            if s.agent_id == agent.id and current_start <= s.date <= current_end
        ]
        previous = [
            Observation(s.overall_score, s.date)
            for s in sessions
            if s.agent_id == agent.id and previous_start <= s.date <= previous_end
        ]
        if not current or not previous:
            continue

        current_avg = weighted_average(current)
        previous_avg = weighted_average(previous)
        improvement = round_half_up(current_avg - previous_avg, 1)
        if best is None or improvement > best["improvement"]:
            best = {
                "agent": _agent_ref(agent),
                "improvement": improvement,
                "current": round_half_up(current_avg, 1),
                "previous": round_half_up(previous_avg, 1),
            }

    if best is None or best["improvement"] <= 0:
        return {
            "agent": None,
            "improvement": 0.0,
            "current": None,
            "previous": None,
            "badge": "No improvement data",
        }

    best["badge"] = "Most Growth (Week over Week)"
    return best


def calculate_dashboard_metrics(
    agents: Sequence[Any],
    rollups: Sequence[AgentRollup],
    sessions: Sequence[ScoredSession],
    as_of: Optional[date] = None,
    window_days: int = TOP_REP_WINDOW_DAYS,
) -> Dict[str, Any]:
    """All four homepage metrics in one payload"""
    as_of = as_of or date.today()
    metrics = {
        "team_average": team_average(rollups),
        "team_greatest_strength": team_greatest_strength(sessions),
        "top_rep_this_week": top_rep_this_week(agents, sessions, as_of, window_days),
        "most_improved": most_improved(agents, sessions, as_of),
        "as_of": as_of,
    }
    logger.debug(f"Dashboard metrics computed as of {as_of}")
    return metrics
