"""
Narrative Insight Engine
Per-category analysis of an agent's ratings and QC comments
"""
import logging
import re
import statistics
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from app.core.rubric import CLOSING_WEIGHTS, MAX_RATING, ROLLUP_CATEGORIES, Category, round_half_up
from app.services.keyword_lexicon import (
    BUCKETS,
    GAPS,
    STRENGTHS,
    TECHNIQUES,
    CommentClassifier,
    default_classifier,
    get_lexicon,
)
from app.services.recency import Observation, weighted_average
from app.services.scoring_service import category_value
from app.services.session_snapshot import ScoredSession

logger = logging.getLogger(__name__)

NO_DATA_SUMMARY = "No QC data available for this category yet."

# Trend
TREND_WINDOW = 10
STABLE_BAND = 0.3
SHARP_CHANGE = 0.5
TREND_STRENGTH_CAP = 2.0
IMPROVING_TRENDS = ("improving", "accelerating")
DECLINING_TRENDS = ("declining", "deteriorating")

# Comment mining
SENTENCE_SPLIT = re.compile(r"[.!?]+")
MIN_SENTENCE_LENGTH = 15
EXAMPLE_LENGTH = (30, 150)
STRENGTH_MIN_RATING = 4
GAP_MAX_RATING = 3
CONFIRMED_MIN_MENTIONS = 2
TOP_THEMES = 3
MAX_EXAMPLES = {STRENGTHS: 2, TECHNIQUES: 2, GAPS: 2}

# (upper bound exclusive, base pts, stretch pts, timeline)
PROJECTION_BANDS = (
    (60, 10, 20, "4-6 weeks"),
    (75, 8, 15, "4-6 weeks"),
    (85, 6, 12, "5-7 weeks"),
    (None, 5, 10, "6-8 weeks"),
)
CONVERSIONS_PER_POINT = 0.3
MIN_ESTIMATED_CONVERSIONS = 2


class HistoryEntry(NamedTuple):
    rating: float
    comment: str
    date: Optional[date]


@dataclass
class CommentMining:
    """Themes and supporting sentences found in an agent's comments"""
    strengths: List[str] = field(default_factory=list)
    techniques: List[str] = field(default_factory=list)
    gaps: List[str] = field(default_factory=list)
    focus_areas: List[Dict[str, Any]] = field(default_factory=list)
    patterns: Dict[str, List[str]] = field(default_factory=dict)
    theme_counts: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass
class CategoryAnalysis:
    category: str
    score: int = 0
    consistency: float = 0.0
    trend: str = "neutral"
    trend_strength: int = 0
    interpretation: str = "N/A"
    session_count: int = 0
    strengths: List[str] = field(default_factory=list)
    techniques: List[str] = field(default_factory=list)
    gaps: List[str] = field(default_factory=list)
    focus_areas: List[Dict[str, Any]] = field(default_factory=list)
    patterns: Dict[str, List[str]] = field(default_factory=dict)
    projection: Optional[Dict[str, Any]] = None
    summary_text: str = NO_DATA_SUMMARY

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def extract_category_history(
    category: Category,
    agent_id: int,
    sessions: Sequence[ScoredSession],
) -> List[HistoryEntry]:
    """Chronological (rating, comment, date) entries where the category was rated"""
    agent_sessions = sorted(
        (s for s in sessions if s.agent_id == agent_id),
        key=lambda s: s.date or date.min,
    )

    history: List[HistoryEntry] = []
    for session in agent_sessions:
        rating = category_value(category, session.ratings)
        if rating is None:
            continue
        if category.is_closing:
            comment = " ".join(c for c in (session.comment(key) for key in CLOSING_WEIGHTS) if c)
        else:
            comment = session.comment(category.rating_keys[0])
        history.append(HistoryEntry(rating, comment, session.date))
    return history


def consistency_score(ratings: Sequence[float]) -> float:
    """100 for identical ratings, minus 40 points per unit of population std dev"""
    if not ratings:
        return 0.0
    spread = statistics.pstdev(ratings) if len(ratings) > 1 else 0.0
    return round_half_up(max(0.0, 100 - spread * 40), 1)


def classify_trend(delta: float) -> str:
    if abs(delta) < STABLE_BAND:
        return "stable"
    if delta > SHARP_CHANGE:
        return "accelerating"
    if delta > 0:
        return "improving"
    if delta < -SHARP_CHANGE:
        return "deteriorating"
    return "declining"


def analyze_trend(history: Sequence[HistoryEntry]) -> Tuple[str, int]:
    """
    Compare the 10 most recent ratings with up to 10 before them.
    Returns (trend, strength 0-100).
    """
    if not history:
        return "neutral", 0

    recent = history[-TREND_WINDOW:]
    older = history[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not older:
        return "stable", 0

    delta = (
        weighted_average([Observation(e.rating, e.date) for e in recent])
        - weighted_average([Observation(e.rating, e.date) for e in older])
    )
    strength = int(round_half_up(min(abs(delta), TREND_STRENGTH_CAP) / TREND_STRENGTH_CAP * 100))
    return classify_trend(delta), strength


def interpret_performance(score: float, consistency: float) -> str:
    """Level label with a consistency qualifier, e.g. 'Strong Performance (Variable)'"""
    if score >= 90:
        level = "Elite Performance"
    elif score >= 80:
        level = "Strong Performance"
    elif score >= 70:
        level = "Solid Performance"
    elif score >= 60:
        level = "Developing Performance"
    elif score >= 50:
        level = "Emerging Performance"
    else:
        level = "Foundational Stage"

    if consistency >= 85:
        note = "Highly Consistent"
    elif consistency >= 70:
        note = "Generally Consistent"
    elif consistency >= 55:
        note = "Variable"
    else:
        note = "Inconsistent"

    return f"{level} ({note})"


def _example_qualifies(bucket: str, sentence: str, rating: float) -> bool:
    low, high = EXAMPLE_LENGTH
    if not low <= len(sentence) <= high:
        return False
    if bucket == GAPS:
        return rating <= GAP_MAX_RATING
    return rating >= STRENGTH_MIN_RATING


def mine_comments(
    history: Sequence[HistoryEntry],
    category: Any,
    classifier: Optional[CommentClassifier] = None,
) -> CommentMining:
    """
    Classify every comment sentence and keep themes mentioned at least twice.

    Examples are verbatim sentences from sessions whose rating supports the
    bucket (>= 4 for strengths and techniques, <= 3 for gaps). Newest
    examples are preferred.
    """
    classifier = classifier or default_classifier
    counts: Dict[str, Counter] = {bucket: Counter() for bucket in BUCKETS}
    examples: Dict[str, List[Tuple[int, str, str]]] = {bucket: [] for bucket in BUCKETS}

    for position, entry in enumerate(history):
        if not entry.comment:
            continue
        for raw in SENTENCE_SPLIT.split(entry.comment):
            sentence = raw.strip()
            if len(sentence) <= MIN_SENTENCE_LENGTH:
                continue
            for match in classifier.classify(sentence, category):
                if match.bucket not in counts:
                    continue
                counts[match.bucket][match.keyword] += 1
                if _example_qualifies(match.bucket, sentence, entry.rating):
                    examples[match.bucket].append((position, sentence, match.keyword))

    confirmed = {
        bucket: [(k, n) for k, n in counts[bucket].most_common(TOP_THEMES) if n >= CONFIRMED_MIN_MENTIONS]
        for bucket in BUCKETS
    }

    def newest(bucket: str, keyword: Optional[str] = None) -> List[str]:
        picked: List[str] = []
        for _, sentence, kw in sorted(examples[bucket], key=lambda e: e[0], reverse=True):
            if keyword is not None and kw != keyword:
                continue
            if sentence not in picked:
                picked.append(sentence)
        return picked

    mining = CommentMining(theme_counts={b: dict(counts[b]) for b in BUCKETS})
    if confirmed[STRENGTHS]:
        mining.strengths = newest(STRENGTHS)[:MAX_EXAMPLES[STRENGTHS]]
    if confirmed[TECHNIQUES]:
        mining.techniques = newest(TECHNIQUES)[:MAX_EXAMPLES[TECHNIQUES]]
    if confirmed[GAPS]:
        mining.gaps = newest(GAPS)[:MAX_EXAMPLES[GAPS]]

    lexicon = get_lexicon(category)
    for keyword, mentions in confirmed[GAPS]:
        pattern = lexicon.gap_index.get(keyword)
        keyword_examples = newest(GAPS, keyword)
        mining.focus_areas.append({
            "keyword": keyword,
            "mentions": mentions,
            "rationale": pattern.rationale if pattern else "Flagged repeatedly in QC comments.",
            "fix": pattern.fix if pattern else "Review the flagged calls with a coach.",
            "impact": pattern.impact if pattern else "More consistent scores in this category.",
            "example": keyword_examples[0] if keyword_examples else None,
        })

    mining.patterns = {
        "consistent_strengths": [f"{k} (mentioned {n}x)" for k, n in confirmed[STRENGTHS]],
        "recurring_issues": [f"{k} (mentioned {n}x)" for k, n in confirmed[GAPS]],
        "common_techniques": [f"{k} (mentioned {n}x)" for k, n in confirmed[TECHNIQUES]],
    }
    return mining


def project_improvement(score: float) -> Dict[str, Any]:
    """Target and stretch scores reachable with coaching, by score band"""
    for upper, base, stretch, timeline in PROJECTION_BANDS:
        if upper is None or score < upper:
            break

    return {
        "current": score,
        "target": min(100, score + base),
        "stretch": min(100, score + stretch),
        "base_improvement": base,
        "stretch_improvement": stretch,
        "timeline": timeline,
        "estimated_conversions": max(MIN_ESTIMATED_CONVERSIONS, int(round_half_up(base * CONVERSIONS_PER_POINT))),
    }


def _trend_marker(trend: str, strength: int) -> str:
    markers = {
        "accelerating": f" 🚀 ACCELERATING (+{strength}%)",
        "improving": f" 📈 IMPROVING (+{strength}%)",
        "declining": f" 📉 DECLINING (-{strength}%)",
        "deteriorating": f" ⚠️ DETERIORATING (-{strength}%)",
    }
    return markers.get(trend, "")


def _coaching_action(category_name: str, score: float, consistency: float, has_focus_areas: bool) -> str:
    if score >= 85 and consistency >= 80:
        return (
            f"Document {category_name} best practices from these sessions for team training. "
            f"Consider this rep as a peer coach."
        )
    if score >= 75 and consistency >= 70:
        return (
            f"Maintain current {category_name} approach. "
            f"Schedule 1-on-1 to identify opportunities for refinement in weaker areas."
        )
    if score >= 65:
        follow_up = (
            "Priority: address the specific issues identified above."
            if has_focus_areas
            else "Focus on building consistency and technique mastery."
        )
        return f"Schedule focused coaching on {category_name}. {follow_up}"
    if score >= 55:
        return (
            f"URGENT: Immediate coaching intervention needed for {category_name}. "
            f"Shadow a top performer, drill specific techniques, and implement daily practice."
        )
    return (
        f"CRITICAL: {category_name} requires comprehensive skill rebuild. "
        f"Implement structured training program with daily coaching, role-play practice, "
        f"and frequent QC reviews."
    )


def build_summary_text(analysis: CategoryAnalysis) -> str:
    """Deterministic coaching summary for one category"""
    count = analysis.session_count
    header = (
        f"**{analysis.interpretation}** - {analysis.score}% weighted average "
        f"({analysis.consistency:.0f}% consistency) across {count} session{'s' if count != 1 else ''}"
        f"{_trend_marker(analysis.trend, analysis.trend_strength)}"
    )
    sections = [header]

    if analysis.strengths:
        lines = [f"{i}. {text}" for i, text in enumerate(analysis.strengths, 1)]
        sections.append("**✅ Proven Strengths:**\n" + "\n".join(lines))

    if analysis.techniques:
        lines = [f"{i}. {text}" for i, text in enumerate(analysis.techniques, 1)]
        sections.append("**🎯 Effective Techniques:**\n" + "\n".join(lines))

    if analysis.focus_areas:
        lines = []
        for i, area in enumerate(analysis.focus_areas, 1):
            line = (
                f"{i}. {area['keyword'].capitalize()} (mentioned {area['mentions']}x): {area['rationale']}\n"
                f"   Fix: {area['fix']}\n"
                f"   Expected impact: {area['impact']}"
            )
            if area.get("example"):
                line += f"\n   Example: \"{area['example']}\""
            lines.append(line)
        sections.append("**🔧 Performance Opportunities:**\n" + "\n".join(lines))
    elif analysis.score < 70:
        sections.append(
            "**🔧 Performance Opportunity:** Improve consistency through focused practice "
            "and technique refinement."
        )

    projection = analysis.projection
    if projection:
        sections.append(
            "**📊 Improvement Projection:**\n"
            f"Current {projection['current']}% -> target {projection['target']}% "
            f"(stretch {projection['stretch']}%) within {projection['timeline']}. "
            f"Estimated additional conversions: {projection['estimated_conversions']}."
        )

    action = "**📋 Coaching Action:**\n" + _coaching_action(
        analysis.category, analysis.score, analysis.consistency, bool(analysis.focus_areas)
    )
    if analysis.consistency < 60:
        action += (
            "\n\n⚠️ **Consistency Alert:** High performance variability detected. "
            "Implement pre-call checklists and standard operating procedures."
        )
    if analysis.trend in DECLINING_TRENDS:
        action += (
            "\n\n📉 **Trend Alert:** Performance declining. Investigate root causes immediately - "
            "possible burnout, confidence issues, or environmental factors."
        )
    elif analysis.trend in IMPROVING_TRENDS:
        action += (
            "\n\n✅ **Positive Momentum:** Keep leveraging what's working. "
            "Document recent wins and replicate successful approaches."
        )
    sections.append(action)

    return "\n\n".join(sections).strip()


def analyze_category(
    category: Any,
    agent_id: int,
    sessions: Sequence[ScoredSession],
    classifier: Optional[CommentClassifier] = None,
) -> CategoryAnalysis:
    """
    Full coaching analysis of one category for one agent.
    Unknown categories and empty histories return the no-data result.
    """
    resolved = Category.from_name(category)
    name = resolved.display_name if resolved else str(category)
    if resolved is None:
        return CategoryAnalysis(category=name)

    history = extract_category_history(resolved, agent_id, sessions)
    if not history:
        return CategoryAnalysis(category=name)

    ratings = [entry.rating for entry in history]
    weighted = weighted_average([Observation(e.rating, e.date) for e in history])
    score = int(round_half_up(weighted / MAX_RATING * 100))
    consistency = consistency_score(ratings)
    trend, trend_strength = analyze_trend(history)
    mining = mine_comments(history, resolved, classifier)

    analysis = CategoryAnalysis(
        category=name,
        score=score,
        consistency=consistency,
        trend=trend,
        trend_strength=trend_strength,
        interpretation=interpret_performance(score, consistency),
        session_count=len(history),
        strengths=mining.strengths,
        techniques=mining.techniques,
        gaps=mining.gaps,
        focus_areas=mining.focus_areas,
        patterns=mining.patterns,
        projection=project_improvement(score),
    )
    analysis.summary_text = build_summary_text(analysis)

    logger.debug(
        f"Analyzed {name} for agent {agent_id}: score={score} consistency={consistency} trend={trend}"
    )
    return analysis


def analyze_agent(
    agent_id: int,
    sessions: Sequence[ScoredSession],
    categories: Sequence[Category] = ROLLUP_CATEGORIES,
    classifier: Optional[CommentClassifier] = None,
) -> Dict[str, CategoryAnalysis]:
    """Analyses keyed by category display name, in rollup order"""
    return {
        category.display_name: analyze_category(category, agent_id, sessions, classifier)
        for category in categories
    }
