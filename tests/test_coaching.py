"""
Overall coaching comment and training suggestion tests
"""
import pytest

from app.services.coaching_service import CoachingService
from app.services.insight_service import CategoryAnalysis


@pytest.fixture
def coaching():
    return CoachingService()


def analysis(name, score, trend="stable", strengths=None, gaps=None, sessions=5, consistency=80.0):
    return CategoryAnalysis(
        category=name,
        score=score,
        consistency=consistency,
        trend=trend,
        session_count=sessions,
        strengths=strengths or [],
        gaps=gaps or [],
    )


class TestOverallComment:

    def test_no_data(self, coaching):
        comment = coaching.generate_overall_comment("Dana", 0, {"Closing": CategoryAnalysis(category="Closing")})
        assert comment.startswith("📊 Dana needs more QC sessions")

    def test_high_performer(self, coaching):
        long_quote = "Built trust instantly by asking about the seller's family and mirroring their pace on every call"
        analyses = {
            "Bonding & Rapport": analysis("Bonding & Rapport", 92, strengths=[long_quote]),
            "Second Ask": analysis("Second Ask", 84, trend="improving"),
        }
        comment = coaching.generate_overall_comment("Dana", 88.0, analyses)

        assert comment.startswith("🔥 Dana is crushing it at 88%!")
        assert "**Bonding & Rapport** (92%, 80% consistent) is their superpower" in comment
        assert f'"{long_quote[:80]}..."' in comment
        assert "Excellent upward trajectory in **Second Ask** 🚀." in comment
        assert "Primary focus" not in comment
        assert comment.endswith("Document these wins and keep pushing! 🎯")

    def test_developing_performer(self, coaching):
        analyses = {
            "Bonding & Rapport": analysis("Bonding & Rapport", 72),
            "Closing": analysis("Closing", 48, trend="deteriorating", gaps=["Gave up after the first price objection"]),
        }
        comment = coaching.generate_overall_comment("Sam", 61.0, analyses)

        assert comment.startswith("📈 Sam is building momentum at 61%.")
        assert "superpower" not in comment
        assert "⚠️ Watch **Closing** - recent decline detected." in comment
        assert 'Primary focus: **Closing** (48%) - "Gave up after the first price objection".' in comment
        assert comment.endswith("will drive rapid improvement! 🚀")

    @pytest.mark.parametrize("score,phrase", [
        (75, "on solid ground"),
        (65, "building momentum"),
        (40, "in growth mode"),
    ])
    def test_tier_phrases(self, coaching, score, phrase):
        comment = coaching.generate_overall_comment("Lee", score, {"Second Ask": analysis("Second Ask", 70)})
        assert phrase in comment

    def test_middle_band_closing_line(self, coaching):
        comment = coaching.generate_overall_comment("Lee", 68, {"Second Ask": analysis("Second Ask", 70)})
        assert "The foundation is solid" in comment


class TestTrainingSuggestions:

    def test_high_rating_with_positive_language(self, coaching):
        ratings = {
            "bonding_rapport": 5,
            "bonding_rapport_comment": "  Excellent rapport with the seller. ",
            "magic_problem": 4,
            "magic_problem_comment": "Asked about the timeline.",
            "second_ask": 3,
            "second_ask_comment": "Good attempt at the second number.",
            "objection_handling": 4,
            "objection_handling_comment": "Handled the price objection well.",
        }
        suggestions = coaching.suggest_training_examples(ratings)

        assert suggestions == [
            {"category": "Bonding & Rapport", "score": 5.0, "qc_comment": "Excellent rapport with the seller."},
            {"category": "Objection Handling", "score": 4.0, "qc_comment": "Handled the price objection well."},
        ]

    def test_separate_comment_mapping(self, coaching):
        suggestions = coaching.suggest_training_examples(
            {"second_ask": 5},
            {"second_ask_comment": "Strong second ask, fantastic setup."},
        )
        assert [s["category"] for s in suggestions] == ["Second Ask"]

    def test_closing_is_not_suggested(self, coaching):
        ratings = {"closing_offer_presentation": 5, "closing_offer_comment": "Great offer delivery."}
        assert coaching.suggest_training_examples(ratings) == []
