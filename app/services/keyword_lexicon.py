"""
Keyword lexicons used to mine QC comments.

Each category has phrase lists for strengths and techniques, and gap patterns
that carry coaching text (why it matters, how to fix it, expected impact).
Classification goes through the CommentClassifier protocol so the keyword
matcher can be swapped for a model without touching the aggregation code.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Protocol, Tuple

from app.core.rubric import Category

STRENGTHS = "strengths"
GAPS = "gaps"
TECHNIQUES = "techniques"
BUCKETS = (STRENGTHS, GAPS, TECHNIQUES)


class GapPattern(NamedTuple):
    """Missing or negative behaviour and the coaching that goes with it"""
    keyword: str
    rationale: str
    fix: str
    impact: str


class KeywordMatch(NamedTuple):
    bucket: str
    keyword: str


@dataclass(frozen=True)
class Lexicon:
    name: str
    strengths: Tuple[str, ...]
    techniques: Tuple[str, ...]
    gaps: Tuple[GapPattern, ...]
    gap_index: Dict[str, GapPattern] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "gap_index", {g.keyword.lower(): g for g in self.gaps})

    def gap(self, keyword: str) -> GapPattern:
        return self.gap_index[keyword.lower()]


BONDING_RAPPORT_LEXICON = Lexicon(
    name=Category.BONDING_RAPPORT.display_name,
    strengths=(
        "genuine empathy", "natural conversation", "excellent rapport", "warm tone",
        "patient", "listening skills", "made client comfortable", "built trust",
        "relatable", "friendly", "professional demeanor", "connected well",
    ),
    techniques=(
        "ice breaker", "small talk", "active listening", "mirroring",
        "asked about client", "personal connection", "humor", "empathy statements",
    ),
    gaps=(
        GapPattern(
            "rushed",
            "Sellers who feel hurried stop sharing personal context.",
            "Slow the first two minutes down and let the seller finish every answer.",
            "More openness later in the call and fewer early hang-ups.",
        ),
        GapPattern(
            "interrupting",
            "Cutting the seller off signals the rep is not listening.",
            "Pause two seconds after the seller stops before responding.",
            "Sellers volunteer more motivation and pain points.",
        ),
        GapPattern(
            "robotic",
            "A scripted delivery makes the call feel like a cold pitch.",
            "Use the script as a guide and paraphrase it in your own words.",
            "Warmer conversations and longer talk time from the seller.",
        ),
        GapPattern(
            "scripted",
            "Reading the script verbatim blocks a personal connection.",
            "Practise the opener until it can be delivered conversationally.",
            "Faster trust and smoother transitions into discovery.",
        ),
        GapPattern(
            "cold tone",
            "Tone sets the emotional temperature of the whole call.",
            "Smile while talking and mirror the seller's energy.",
            "Sellers stay engaged through the harder questions.",
        ),
        GapPattern(
            "impatient",
            "Impatience reads as pressure and triggers resistance.",
            "Let silences happen and acknowledge before moving on.",
            "Lower resistance when the price conversation starts.",
        ),
        GapPattern(
            "didn't listen",
            "Missing what the seller said undermines every later step.",
            "Summarise the seller's last point before asking the next question.",
            "Sellers feel heard and share the real reason for selling.",
        ),
        GapPattern(
            "talking too much",
            "When the rep dominates, the seller stops revealing information.",
            "Aim for the seller talking at least 60% of the time.",
            "Richer discovery and better-positioned offers.",
        ),
        GapPattern(
            "not engaged",
            "A disengaged rep gets surface-level answers.",
            "Ask one follow-up about anything personal the seller mentions.",
            "Deeper rapport and more honest answers.",
        ),
        GapPattern(
            "mechanical",
            "A checklist feel makes the seller guarded.",
            "Link each question to something the seller already said.",
            "Conversations that flow instead of interrogations.",
        ),
    ),
)

MAGIC_PROBLEM_LEXICON = Lexicon(
    name=Category.MAGIC_PROBLEM.display_name,
    strengths=(
        "excellent probing", "uncovered pain", "discovered motivation", "deep questions",
        "found urgency", "identified real problem", "great questions", "pain funnel",
    ),
    techniques=(
        "open-ended questions", "why questions", "pain funnel", "follow-up probing",
        "discovered timeline", "uncovered motivation", "asked about consequences",
    ),
    gaps=(
        GapPattern(
            "didn't probe",
            "Without probing the rep never learns why the seller must sell.",
            "Follow every motivation answer with 'tell me more about that'.",
            "Offers anchored to real motivation instead of price alone.",
        ),
        GapPattern(
            "surface level",
            "Surface answers hide the urgency that drives a deal.",
            "Ask at least three layers of 'why' before moving on.",
            "Clearer urgency and stronger second asks.",
        ),
        GapPattern(
            "missed pain",
            "Unspoken pain leaves nothing to leverage at closing.",
            "Restate the problem and ask what happens if it is not solved.",
            "More motivated sellers at the offer stage.",
        ),
        GapPattern(
            "no follow-up",
            "Single questions leave the magic problem undiscovered.",
            "Prepare two follow-ups for every discovery question.",
            "Better-qualified leads and fewer dead calls.",
        ),
        GapPattern(
            "didn't dig",
            "Stopping early misses the core reason for selling.",
            "Keep asking until the seller names a consequence or a deadline.",
            "Higher conversion on motivated sellers.",
        ),
        GapPattern(
            "superficial questions",
            "Generic questions produce generic answers.",
            "Use the pain funnel: situation, problem, impact, urgency.",
            "Discovery that actually shapes the offer.",
        ),
        GapPattern(
            "didn't discover",
            "The offer cannot be positioned without the seller's why.",
            "Do not move to price until the reason for selling is clear.",
            "Fewer objections later in the call.",
        ),
        GapPattern(
            "skipped pain funnel",
            "Skipping the funnel skips the emotional leverage.",
            "Walk every step of the pain funnel on every call.",
            "Stronger motivation to position the offer against.",
        ),
    ),
)

SECOND_ASK_LEXICON = Lexicon(
    name=Category.SECOND_ASK.display_name,
    strengths=(
        "set clear expectations", "smooth transition", "confirmed interest",
        "great setup", "natural flow", "positioned appointment", "closed for appointment",
    ),
    techniques=(
        "assumptive close", "trial close", "confirmed availability",
        "set specific time", "addressed objections", "clear next steps",
    ),
    gaps=(
        GapPattern(
            "didn't ask",
            "Without the second ask the repair conversation never moves the price.",
            "Always walk through estimated repairs and ask for a second number.",
            "Lower second prices and more workable deals.",
        ),
        GapPattern(
            "weak close",
            "A tentative ask invites the seller to hold firm.",
            "State the repair total confidently and stop talking.",
            "Sellers adjust expectations instead of defending the first price.",
        ),
        GapPattern(
            "unclear expectations",
            "Sellers resist what they do not understand.",
            "Explain how repairs affect the price before asking again.",
            "Fewer surprises when the offer is presented.",
        ),
        GapPattern(
            "no call to action",
            "The conversation ends without a new number on the table.",
            "Finish the repair review with a direct question about price.",
            "A second price captured on every qualified call.",
        ),
        GapPattern(
            "missed opportunity",
            "Repair details mentioned but not used are wasted leverage.",
            "Write down every repair mentioned and total them out loud.",
            "More realistic seller expectations.",
        ),
        GapPattern(
            "hesitant",
            "Hesitation signals the number is negotiable upwards.",
            "Role-play the second ask until it feels routine.",
            "Confident delivery and better price movement.",
        ),
        GapPattern(
            "didn't transition",
            "An abrupt jump to price feels like a haggle.",
            "Bridge from the condition review into the repair estimate.",
            "Smoother flow and less pushback.",
        ),
    ),
)

CLOSING_LEXICON = Lexicon(
    name=Category.CLOSING.display_name,
    strengths=(
        "strong close", "confident", "handled objections", "secured commitment",
        "assumptive language", "addressed concerns", "closed deal",
    ),
    techniques=(
        "trial close", "assumptive close", "alternative choice", "urgency",
        "addressed hesitation", "reframed objection", "confirmed commitment",
    ),
    gaps=(
        GapPattern(
            "weak close",
            "Offers presented without conviction rarely get accepted.",
            "Present the CASH and RBP offers back to back and ask which fits best.",
            "More accepted offers on the first call.",
        ),
        GapPattern(
            "gave up",
            "Most agreements come after the first no.",
            "Prepare two responses for the most common objections.",
            "Recovered deals that would otherwise go dead.",
        ),
        GapPattern(
            "didn't overcome objection",
            "An unanswered objection becomes the reason the deal dies.",
            "Acknowledge, isolate and answer each objection before re-asking.",
            "Higher close rate on pending leads.",
        ),
        GapPattern(
            "uncertain",
            "Seller confidence follows rep confidence.",
            "Know both offers cold before dialling.",
            "Sellers trust the numbers being presented.",
        ),
        GapPattern(
            "lost control",
            "Letting the seller steer ends with a stall.",
            "Return to the seller's motivation whenever the call drifts.",
            "Calls that end with a decision or a scheduled next step.",
        ),
        GapPattern(
            "didn't ask",
            "No ask means no commitment.",
            "End every offer presentation with a direct ask.",
            "A clear yes, no or next step on every call.",
        ),
        GapPattern(
            "passive",
            "A passive close leaves the decision hanging.",
            "Use assumptive language once the seller shows interest.",
            "Shorter time from offer to signed agreement.",
        ),
    ),
)

OBJECTION_HANDLING_LEXICON = Lexicon(
    name=Category.OBJECTION_HANDLING.display_name,
    strengths=(
        "handled objections", "stayed calm", "acknowledged concern", "confident response",
        "turned it around", "reassured", "addressed concerns",
    ),
    techniques=(
        "feel felt found", "reframed objection", "isolated the objection",
        "asked clarifying questions", "social proof", "addressed hesitation",
    ),
    gaps=(
        GapPattern(
            "argued",
            "Arguing hardens the seller's position.",
            "Acknowledge the concern before offering another view.",
            "Sellers stay open to the offer.",
        ),
        GapPattern(
            "defensive",
            "Defensiveness turns an objection into a conflict.",
            "Treat every objection as a request for more information.",
            "Calmer calls and more objections resolved.",
        ),
        GapPattern(
            "ignored objection",
            "An ignored objection resurfaces at the worst moment.",
            "Repeat the objection back and confirm it is the only one.",
            "Fewer late-stage surprises.",
        ),
        GapPattern(
            "didn't overcome objection",
            "The seller leaves with the concern unresolved.",
            "Use feel-felt-found and ask a closing question afterwards.",
            "More objections converted into commitments.",
        ),
        GapPattern(
            "gave up",
            "Folding at the first objection forfeits the deal.",
            "Prepare responses to the top five objections in the library.",
            "Recovered deals from hesitant sellers.",
        ),
    ),
)

DEFAULT_LEXICON = Lexicon(
    name="General",
    strengths=(
        "excellent", "strong", "effective", "great", "outstanding", "professional",
        "natural", "confident", "skilled", "mastery",
    ),
    techniques=(
        "used", "applied", "demonstrated", "asked", "probed", "discovered",
        "established", "built", "maintained",
    ),
    gaps=(
        GapPattern(
            "needs improvement",
            "The reviewer flagged this behaviour as below standard.",
            "Review the flagged call with a coach and agree one change.",
            "Steady movement toward the team average.",
        ),
        GapPattern(
            "should",
            "The reviewer named a step the rep was expected to take.",
            "Turn the reviewer's suggestion into a line the rep rehearses before calls.",
            "Expected steps show up on the next scored calls.",
        ),
        GapPattern(
            "could",
            "There was a better option available in the moment.",
            "Replay the call and script the alternative the reviewer described.",
            "More options used on live calls.",
        ),
        GapPattern(
            "missed",
            "A missed step leaves value on the table.",
            "Use the call checklist until the step becomes habit.",
            "More complete calls.",
        ),
        GapPattern(
            "didn't",
            "A required behaviour did not happen.",
            "Identify the trigger that should prompt the behaviour.",
            "Fewer skipped steps.",
        ),
        GapPattern(
            "lacking",
            "The skill is present but underdeveloped.",
            "Schedule focused role-play on this skill.",
            "More consistent scores in this category.",
        ),
        GapPattern(
            "weak",
            "Weak execution lowers the whole call's effectiveness.",
            "Shadow a top performer on this part of the call.",
            "Stronger execution within a few weeks.",
        ),
        GapPattern(
            "struggled",
            "Repeated struggle points at a knowledge gap.",
            "Break the skill into steps and drill each one.",
            "Growing confidence on live calls.",
        ),
        GapPattern(
            "improve",
            "The reviewer wants this behaviour raised toward standard.",
            "Pick one measurable change and check it at the next QC review.",
            "Steady score gains in this category.",
        ),
        GapPattern(
            "work on",
            "The reviewer asked for deliberate practice here.",
            "Set a weekly practice goal and review it in one-on-ones.",
            "Visible progress at the next QC review.",
        ),
    ),
)

CATEGORY_LEXICONS: Dict[Category, Lexicon] = {
    Category.BONDING_RAPPORT: BONDING_RAPPORT_LEXICON,
    Category.MAGIC_PROBLEM: MAGIC_PROBLEM_LEXICON,
    Category.SECOND_ASK: SECOND_ASK_LEXICON,
    Category.OBJECTION_HANDLING: OBJECTION_HANDLING_LEXICON,
    Category.CLOSING: CLOSING_LEXICON,
}


def get_lexicon(category: Any) -> Lexicon:
    """Lexicon for a Category or category name; unknown input gets the default."""
    resolved = Category.from_name(category)
    if resolved is None and isinstance(category, str):
        # Loose matching for free-form labels such as "Closing Skills"
        lowered = category.lower()
        if "bond" in lowered or "rapport" in lowered:
            resolved = Category.BONDING_RAPPORT
        elif "magic" in lowered or "discovery" in lowered:
            resolved = Category.MAGIC_PROBLEM
        elif "second" in lowered:
            resolved = Category.SECOND_ASK
        elif "objection" in lowered:
            resolved = Category.OBJECTION_HANDLING
        elif "clos" in lowered:
            resolved = Category.CLOSING
    return CATEGORY_LEXICONS.get(resolved, DEFAULT_LEXICON)


class CommentClassifier(Protocol):
    """Strategy that tags a comment sentence with lexicon buckets"""

    def classify(self, sentence: str, category: Any) -> List[KeywordMatch]:
        ...


class KeywordClassifier:
    """Case-insensitive substring matching against the category lexicon"""

    def classify(self, sentence: str, category: Any) -> List[KeywordMatch]:
        if not isinstance(sentence, str) or not sentence:
            return []
        lowered = sentence.lower()
        lexicon = get_lexicon(category)

        matches: List[KeywordMatch] = []
        for keyword in lexicon.strengths:
            if keyword.lower() in lowered:
                matches.append(KeywordMatch(STRENGTHS, keyword.lower()))
        for gap in lexicon.gaps:
            if gap.keyword.lower() in lowered:
                matches.append(KeywordMatch(GAPS, gap.keyword.lower()))
        for keyword in lexicon.techniques:
            if keyword.lower() in lowered:
                matches.append(KeywordMatch(TECHNIQUES, keyword.lower()))
        return matches


default_classifier = KeywordClassifier()
