"""
Coaching Feedback Service
Overall coaching comment for an agent and training clip suggestions
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from app.core.rubric import STANDALONE_RATING_KEYS, Category, coerce_rating
from app.services.insight_service import DECLINING_TRENDS, IMPROVING_TRENDS, CategoryAnalysis

logger = logging.getLogger(__name__)

QUOTE_LIMIT = 80
TRAINING_MIN_RATING = 4
POSITIVE_WORDS = (
    "great",
    "excellent",
    "amazing",
    "outstanding",
    "superb",
    "fantastic",
    "good",
    "well",
    "strong",
)


def _quote(text: str) -> str:
    if len(text) > QUOTE_LIMIT:
        return text[:QUOTE_LIMIT] + "..."
    return text


class CoachingService:
    """Builds the human-readable coaching feedback shown on the deep dive"""

    def generate_overall_comment(
        self,
        agent_name: str,
        overall_score: float,
        analyses: Mapping[str, CategoryAnalysis],
    ) -> str:
        """
        One paragraph summarising an agent across categories.

        Opens with a tier phrase for the overall score, then calls out the
        strongest and weakest categories and the first improving and
        declining trends.
        """
        scored = [a for a in analyses.values() if a.session_count > 0]
        if not scored:
            return (
                f"📊 {agent_name} needs more QC sessions to generate intelligent analysis. "
                f"Add more sessions to unlock AI-powered insights!"
            )

        if overall_score >= 80:
            opening = f"🔥 {agent_name} is crushing it at {overall_score:.0f}%!"
        elif overall_score >= 70:
            opening = f"💪 {agent_name} is on solid ground at {overall_score:.0f}%."
        elif overall_score >= 60:
            opening = f"📈 {agent_name} is building momentum at {overall_score:.0f}%."
        else:
            opening = f"🌱 {agent_name} is in growth mode at {overall_score:.0f}%."
        parts = [opening]

        strongest = max(scored, key=lambda a: a.score)
        if strongest.score >= 75:
            line = (
                f"**{strongest.category}** ({strongest.score}%, {strongest.consistency:.0f}% consistent) "
                f"is their superpower"
            )
            if strongest.strengths:
                line += f' - "{_quote(strongest.strengths[0])}"'
            parts.append(line + ".")

        improving = next((a for a in scored if a.trend in IMPROVING_TRENDS), None)
        if improving is not None:
            parts.append(f"Excellent upward trajectory in **{improving.category}** 🚀.")

        declining = next((a for a in scored if a.trend in DECLINING_TRENDS), None)
        if declining is not None:
            parts.append(f"⚠️ Watch **{declining.category}** - recent decline detected.")

        weakest = min(scored, key=lambda a: a.score)
        if weakest.score < 70:
            line = f"Primary focus: **{weakest.category}** ({weakest.score}%)"
            if weakest.gaps:
                line += f' - "{_quote(weakest.gaps[0])}"'
            elif weakest.focus_areas:
                line += f" - {weakest.focus_areas[0]['fix']}"
            parts.append(line + ".")

        if overall_score >= 75:
            parts.append("Document these wins and keep pushing! 🎯")
        elif overall_score >= 65:
            parts.append(
                "The foundation is solid - targeted coaching on weak spots will elevate "
                "performance significantly! 💪"
            )
        else:
            parts.append(
                "Clear development path identified - focused daily practice on these specific "
                "areas will drive rapid improvement! 🚀"
            )

        return " ".join(parts)

    def suggest_training_examples(
        self,
        ratings: Mapping[str, Any],
        comments: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Standalone categories rated 4+ whose comment uses positive language.
        Comments default to the `<key>_comment` entries of `ratings`.
        """
        comments = ratings if comments is None else comments
        suggestions: List[Dict[str, Any]] = []

        for key in STANDALONE_RATING_KEYS:
            rating = coerce_rating(ratings.get(key.value))
            if rating is None or rating < TRAINING_MIN_RATING:
                continue
            comment = comments.get(key.comment_key) or comments.get(key.value) or ""
            if not isinstance(comment, str):
                continue
            lowered = comment.lower()
            if not any(word in lowered for word in POSITIVE_WORDS):
                continue
            suggestions.append({
                "category": Category.from_name(key.value).display_name,
                "score": rating,
                "qc_comment": comment.strip(),
            })

        if suggestions:
            logger.debug(f"Suggested {len(suggestions)} training example(s)")
        return suggestions


# Global service instance (lazy initialization)
_coaching_service: Optional[CoachingService] = None


def get_coaching_service() -> CoachingService:
    """Get or create the coaching service singleton"""
    global _coaching_service
    if _coaching_service is None:
        _coaching_service = CoachingService()
    return _coaching_service
