"""
Team dashboard metric tests
"""
from datetime import date

import pytest

from app.services.dashboard_metrics import (
    business_week,
    calculate_dashboard_metrics,
    most_improved,
    team_average,
    team_greatest_strength,
    top_rep_this_week,
)
from app.services.scoring_service import compute_roster
from tests.factories import make_session


class Rep:
    def __init__(self, id, name):
        self.id = id
        self.name = name


AGENTS = [Rep(1, "Avery"), Rep(2, "Blake"), Rep(3, "Casey")]
AS_OF = date(2026, 3, 11)  # a Wednesday


class TestTeamAverage:

    def test_mean_over_all_agents(self):
        sessions = [make_session(agent_id=1, bonding_rapport=5), make_session(agent_id=2, bonding_rapport=3)]
        rollups = compute_roster(AGENTS, sessions)
        # 100, 60 and an agent with no sessions at 0
        assert team_average(rollups) == pytest.approx(53.3)

    def test_no_agents(self):
        assert team_average([]) == 0.0


class TestTeamStrength:

    def test_best_category_wins(self):
        sessions = [
            make_session(agent_id=1, day=date(2026, 3, 2), bonding_rapport=3, second_ask=5),
            make_session(agent_id=2, day=date(2026, 3, 3), bonding_rapport=4, second_ask=4),
        ]
        strength = team_greatest_strength(sessions)
        assert strength["category"] == "Second Ask"
        assert strength["score"] == 90.0
        assert strength["badge"] == "Team Superpower"

    def test_closing_uses_synthetic_value(self):
        sessions = [make_session(closing_offer_presentation=5, closing_motivation=5, closing_objections=5, bonding_rapport=4)]
        assert team_greatest_strength(sessions)["category"] == "Closing"

    def test_no_ratings(self):
        strength = team_greatest_strength([make_session()])
        assert strength["category"] is None
        assert strength["score"] == 0.0


class TestTopRep:

    def test_best_weighted_rating_in_window(self):
        sessions = [
            make_session(agent_id=1, day=date(2026, 3, 10), bonding_rapport=4, second_ask=4),
            make_session(agent_id=2, day=date(2026, 3, 9), bonding_rapport=5),
            # outside the 7-day window
            make_session(agent_id=3, day=date(2026, 3, 1), bonding_rapport=5),
        ]
        top = top_rep_this_week(AGENTS, sessions, as_of=AS_OF)
        assert top["agent"] == {"id": 2, "name": "Blake"}
        assert top["score"] == 100.0
        assert top["session_count"] == 1
        assert top["badge"] == "Top Performer"

    def test_tie_goes_to_more_sessions(self):
        sessions = [
            make_session(agent_id=1, day=date(2026, 3, 10), bonding_rapport=4),
            make_session(agent_id=2, day=date(2026, 3, 9), bonding_rapport=4),
            make_session(agent_id=2, day=date(2026, 3, 10), magic_problem=4),
        ]
        top = top_rep_this_week(AGENTS, sessions, as_of=AS_OF)
        assert top["agent"]["id"] == 2
        assert top["session_count"] == 2

    def test_window_boundaries_are_inclusive(self):
        sessions = [make_session(agent_id=3, day=date(2026, 3, 4), bonding_rapport=3)]
        top = top_rep_this_week(AGENTS, sessions, as_of=AS_OF)
        assert top["agent"]["id"] == 3

    def test_no_sessions_in_window(self):
        top = top_rep_this_week(AGENTS, [], as_of=AS_OF)
        assert top["agent"] is None
        assert top["badge"] == "No data this week"


class TestMostImproved:

    def test_business_week(self):
        assert business_week(AS_OF) == (date(2026, 3, 9), date(2026, 3, 13))
        # Sunday belongs to the week just ended
        assert business_week(date(2026, 3, 15)) == (date(2026, 3, 9), date(2026, 3, 13))

    def test_largest_gain_wins(self):
        sessions = [
            make_session(agent_id=1, day=date(2026, 3, 3), overall_score=60.0),
            make_session(agent_id=1, day=date(2026, 3, 10), overall_score=80.0),
            make_session(agent_id=2, day=date(2026, 3, 4), overall_score=70.0),
            make_session(agent_id=2, day=date(2026, 3, 9), overall_score=75.0),
        ]
        improved = most_improved(AGENTS, sessions, as_of=AS_OF)
        assert improved["agent"] == {"id": 1, "name": "Avery"}
        assert improved["improvement"] == 20.0
        assert improved["current"] == 80.0
        assert improved["previous"] == 60.0
        assert improved["badge"] == "Most Growth (Week over Week)"

    def test_needs_both_weeks(self):
        sessions = [make_session(agent_id=1, day=date(2026, 3, 10), overall_score=90.0)]
        assert most_improved(AGENTS, sessions, as_of=AS_OF)["agent"] is None

    def test_decline_only_is_no_improvement(self):
        sessions = [
            make_session(agent_id=1, day=date(2026, 3, 3), overall_score=80.0),
            make_session(agent_id=1, day=date(2026, 3, 10), overall_score=70.0),
        ]
        improved = most_improved(AGENTS, sessions, as_of=AS_OF)
        assert improved["agent"] is None
        assert improved["badge"] == "No improvement data"


def test_calculate_dashboard_metrics_payload():
    sessions = [make_session(agent_id=1, day=date(2026, 3, 10), overall_score=74.6, bonding_rapport=4)]
    rollups = compute_roster(AGENTS, sessions)
    metrics = calculate_dashboard_metrics(AGENTS, rollups, sessions, as_of=AS_OF)

    assert set(metrics) == {"team_average", "team_greatest_strength", "top_rep_this_week", "most_improved", "as_of"}
    assert metrics["as_of"] == AS_OF
    assert metrics["top_rep_this_week"]["agent"]["id"] == 1
