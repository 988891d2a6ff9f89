"""
QC scoring rubric - binary questions, rated categories and closing weights
"""
import enum
import math
from typing import Any, Dict, Optional, Tuple


class BinaryAnswer(str, enum.Enum):
    """Answer to a yes/no checklist question"""
    YES = "yes"
    NO = "no"
    NOT_APPLICABLE = "n/a"

    @classmethod
    def normalize(cls, value: Any) -> "BinaryAnswer":
        """
        Map stored or submitted values onto an answer.
        Legacy rows use True/False/None; anything unrecognised counts as N/A.
        """
        if isinstance(value, cls):
            return value
        if value is True:
            return cls.YES
        if value is False:
            return cls.NO
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("yes", "y", "true"):
                return cls.YES
            if lowered in ("no", "n", "false"):
                return cls.NO
        return cls.NOT_APPLICABLE


class BinaryQuestion(str, enum.Enum):
    """The three session-level checklist questions (30% of the overall score)"""
    INTRO = "intro"
    FIRST_ASK = "first_ask"
    PROPERTY_CONDITION = "property_condition"

    @property
    def text(self) -> str:
        return BINARY_QUESTION_TEXT[self]


BINARY_QUESTION_TEXT = {
    BinaryQuestion.INTRO: (
        "Did the rep introduce themselves, the company, state the nature of the call "
        "and ask if it's a convenient time to talk?"
    ),
    BinaryQuestion.FIRST_ASK: (
        "Did the rep ask for first desired price, timeframe and explain our process confidently?"
    ),
    BinaryQuestion.PROPERTY_CONDITION: (
        "Did the rep collect decision maker information, gather occupancy/tenant details "
        "and cover the condition of all major systems and possible repairs?"
    ),
}


class RatingKey(str, enum.Enum):
    """1-5 rating fields stored on category_scores"""
    BONDING_RAPPORT = "bonding_rapport"
    MAGIC_PROBLEM = "magic_problem"
    SECOND_ASK = "second_ask"
    OBJECTION_HANDLING = "objection_handling"
    CLOSING_OFFER_PRESENTATION = "closing_offer_presentation"
    CLOSING_MOTIVATION = "closing_motivation"
    CLOSING_OBJECTIONS = "closing_objections"

    @property
    def comment_key(self) -> str:
        # offer presentation keeps its historical column name
        if self is RatingKey.CLOSING_OFFER_PRESENTATION:
            return "closing_offer_comment"
        return f"{self.value}_comment"


STANDALONE_RATING_KEYS: Tuple[RatingKey, ...] = (
    RatingKey.BONDING_RAPPORT,
    RatingKey.MAGIC_PROBLEM,
    RatingKey.SECOND_ASK,
    RatingKey.OBJECTION_HANDLING,
)

CLOSING_WEIGHTS: Dict[RatingKey, float] = {
    RatingKey.CLOSING_OFFER_PRESENTATION: 0.4,
    RatingKey.CLOSING_MOTIVATION: 0.4,
    RatingKey.CLOSING_OBJECTIONS: 0.2,
}

BINARY_WEIGHT = 0.3
CATEGORY_WEIGHT = 0.7
MAX_RATING = 5


class Category(enum.Enum):
    """
    Scoring category shown to users.
    Carries both the display name and the rating field(s) it reads.
    """
    BONDING_RAPPORT = ("Bonding & Rapport", (RatingKey.BONDING_RAPPORT,))
    MAGIC_PROBLEM = ("Magic Problem Discovery", (RatingKey.MAGIC_PROBLEM,))
    SECOND_ASK = ("Second Ask", (RatingKey.SECOND_ASK,))
    OBJECTION_HANDLING = ("Objection Handling", (RatingKey.OBJECTION_HANDLING,))
    CLOSING = ("Closing", tuple(CLOSING_WEIGHTS))

    def __init__(self, display_name: str, rating_keys: Tuple[RatingKey, ...]):
        self.display_name = display_name
        self.rating_keys = rating_keys

    @property
    def slug(self) -> str:
        return self.name.lower()

    @property
    def is_closing(self) -> bool:
        return self is Category.CLOSING

    @classmethod
    def from_name(cls, name: Any) -> Optional["Category"]:
        """Resolve a display name, enum name or slug. Unknown names give None."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        wanted = name.strip().lower()
        for category in cls:
            if wanted in (category.display_name.lower(), category.slug):
                return category
            if len(category.rating_keys) == 1 and wanted == category.rating_keys[0].value:
                return category
        if wanted == "magic problem":
            return cls.MAGIC_PROBLEM
        return None


# Categories shown in the roster rollup and dashboard breakdown
ROLLUP_CATEGORIES: Tuple[Category, ...] = (
    Category.BONDING_RAPPORT,
    Category.MAGIC_PROBLEM,
    Category.SECOND_ASK,
    Category.CLOSING,
)


def coerce_rating(value: Any) -> Optional[float]:
    """Return the rating as a float in [1, 5], or None when absent or malformed."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    value = float(value)
    if math.isnan(value) or value < 1 or value > MAX_RATING:
        return None
    return value


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the dashboard does (halves away from zero for positives)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
