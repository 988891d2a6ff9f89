"""
Keyword lexicon and default classifier tests
"""
import pytest

from app.core.rubric import Category
from app.services.keyword_lexicon import (
    CATEGORY_LEXICONS,
    DEFAULT_LEXICON,
    GAPS,
    STRENGTHS,
    TECHNIQUES,
    KeywordClassifier,
    KeywordMatch,
    get_lexicon,
)


class TestGetLexicon:

    @pytest.mark.parametrize("name,expected", [
        (Category.BONDING_RAPPORT, "Bonding & Rapport"),
        ("Magic Problem Discovery", "Magic Problem Discovery"),
        ("magic problem", "Magic Problem Discovery"),
        ("second_ask", "Second Ask"),
        ("Closing Skills", "Closing"),
        ("objection handling", "Objection Handling"),
    ])
    def test_resolves_names(self, name, expected):
        assert get_lexicon(name).name == expected

    @pytest.mark.parametrize("name", ["Tonality", "", None, 12])
    def test_unknown_falls_back_to_default(self, name):
        assert get_lexicon(name) is DEFAULT_LEXICON

    def test_every_category_has_a_lexicon(self):
        assert set(CATEGORY_LEXICONS) == set(Category)

    def test_gap_patterns_carry_coaching_text(self):
        for lexicon in list(CATEGORY_LEXICONS.values()) + [DEFAULT_LEXICON]:
            assert lexicon.strengths and lexicon.techniques and lexicon.gaps
            for gap in lexicon.gaps:
                assert gap.rationale and gap.fix and gap.impact
                assert lexicon.gap(gap.keyword) is gap


class TestKeywordClassifier:

    def test_matches_each_bucket(self):
        classifier = KeywordClassifier()
        matches = classifier.classify(
            "Built trust early with active listening but sounded rushed at the end",
            Category.BONDING_RAPPORT,
        )
        assert KeywordMatch(STRENGTHS, "built trust") in matches
        assert KeywordMatch(TECHNIQUES, "active listening") in matches
        assert KeywordMatch(GAPS, "rushed") in matches

    def test_case_insensitive(self):
        matches = KeywordClassifier().classify("ROBOTIC delivery on the opener", "Bonding & Rapport")
        assert matches == [KeywordMatch(GAPS, "robotic")]

    def test_no_match(self):
        assert KeywordClassifier().classify("The call dropped twice", Category.SECOND_ASK) == []

    @pytest.mark.parametrize("sentence", ["", None, 42])
    def test_bad_input_returns_nothing(self, sentence):
        assert KeywordClassifier().classify(sentence, Category.CLOSING) == []

    def test_default_lexicon_catches_soft_suggestions(self):
        matches = KeywordClassifier().classify(
            "Rep should slow down and could improve the tone", "Tonality"
        )
        gaps = {m.keyword for m in matches if m.bucket == GAPS}
        assert {"should", "could", "improve"} <= gaps
