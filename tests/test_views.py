"""
View navigation tests
"""
import pytest

from app.core.views import (
    DashboardView,
    DeepDiveView,
    InvalidTransition,
    ReportingView,
    ScoringFormView,
    navigate,
)


def test_dashboard_to_reporting():
    assert navigate(DashboardView(), "reporting", agent_id=3) == ReportingView(agent_id=3)


def test_reporting_to_deep_dive_keeps_agent():
    assert navigate(ReportingView(agent_id=3), "deep-dive") == DeepDiveView(agent_id=3)


def test_any_view_back_to_dashboard():
    assert navigate(DeepDiveView(agent_id=3), "dashboard") == DashboardView()


def test_scoring_form_agent_is_optional():
    assert navigate(DashboardView(), "scoring_form") == ScoringFormView(agent_id=None)
    assert navigate(DeepDiveView(agent_id=5), "scoring_form") == ScoringFormView(agent_id=5)


@pytest.mark.parametrize("target", ["reporting", "deep_dive"])
def test_agent_views_require_agent(target):
    with pytest.raises(InvalidTransition):
        navigate(DashboardView(), target)


def test_unknown_view():
    with pytest.raises(InvalidTransition, match="Unknown view"):
        navigate(DashboardView(), "settings")
