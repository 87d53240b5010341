from __future__ import annotations

from typing import Sequence

ASSESSMENT_TERMS: tuple[str, ...] = (
    "Calm",
    "Kind-hearted",
    "Industrious",
    "Careful",
    "Agreeable",
    "Persuasive",
    "Demanding",
    "Talkative",
    "Modest",
    "Generous",
    "Spontaneous",
    "Soft-hearted",
    "Pleasant",
    "Spirited",
    "Attractive",
    "Fussy",
    "Compassionate",
    "Earnest",
    "Shy",
    "Daring",
    "Persistent",
    "Individualistic",
    "Selfish",
    "Compelling",
    "Good-natured",
    "Understanding",
    "Adaptable",
    "Aggressive",
    "Outgoing",
    "Controlling",
)

TERM_COUNT = len(ASSESSMENT_TERMS)
MIN_RATING = 1
MAX_RATING = 5
UNANSWERED = 0

RATING_SCALE: dict[int, str] = {
    1: "Not very",
    2: "Just a little",
    3: "Somewhat",
    4: "Ordinarily",
    5: "Very",
}


def completed_count(ratings: Sequence[int]) -> int:
    return sum(1 for value in ratings if MIN_RATING <= value <= MAX_RATING)


def is_complete(ratings: Sequence[int]) -> bool:
    return len(ratings) == TERM_COUNT and completed_count(ratings) == TERM_COUNT
