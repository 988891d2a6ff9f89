"""
Dashboard navigation states
Each view carries the payload it needs, so a deep dive without an agent cannot exist
"""
from dataclasses import dataclass
from typing import Optional, Union


class InvalidTransition(ValueError):
    """Raised when a view is requested without the data it requires"""


@dataclass(frozen=True)
class DashboardView:
    name: str = "dashboard"


@dataclass(frozen=True)
class ReportingView:
    agent_id: int
    name: str = "reporting"


@dataclass(frozen=True)
class DeepDiveView:
    agent_id: int
    name: str = "deep_dive"


@dataclass(frozen=True)
class ScoringFormView:
    agent_id: Optional[int] = None
    name: str = "scoring_form"


View = Union[DashboardView, ReportingView, DeepDiveView, ScoringFormView]

VIEW_NAMES = ("dashboard", "reporting", "deep_dive", "scoring_form")


def _normalize(target: str) -> str:
    return target.strip().lower().replace("-", "_")


def navigate(current: View, target: str, agent_id: Optional[int] = None) -> View:
    """
    Move from `current` to the view named `target`.

    Agent-scoped views reuse the current view's agent when none is given.
    Raises InvalidTransition for unknown views or a missing agent.
    """
    name = _normalize(target)
    if agent_id is None:
        agent_id = getattr(current, "agent_id", None)

    if name == "dashboard":
        return DashboardView()
    if name == "scoring_form":
        return ScoringFormView(agent_id=agent_id)
    if name in ("reporting", "deep_dive"):
        if agent_id is None:
            raise InvalidTransition(f"{name} view requires a selected agent")
        if name == "reporting":
            return ReportingView(agent_id=agent_id)
        return DeepDiveView(agent_id=agent_id)

    raise InvalidTransition(f"Unknown view: {target}")
