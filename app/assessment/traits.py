from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Sequence

from app.assessment.archetypes import TRAIT_ORDER, Archetype, archetype_for_trait
from app.assessment.terms import MAX_RATING, MIN_RATING, TERM_COUNT

# Rating indices averaged into each trait. Groups may share indices.
TRAIT_INDEX_GROUPS: dict[str, tuple[int, int, int, int, int]] = {
    "dominance": (6, 19, 23, 27, 29),
    "influence": (5, 7, 13, 28, 23),
    "steadiness": (0, 1, 4, 8, 12),
    "conscientiousness": (2, 3, 15, 17, 20),
    "empathy": (1, 9, 11, 16, 25),
    "adaptability": (10, 26, 24, 14, 18),
}


class InvalidRatingsError(ValueError):
    pass


@dataclass(frozen=True)
class TraitScores:
    dominance: float
    influence: float
    steadiness: float
    conscientiousness: float
    empathy: float
    adaptability: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def validate_ratings(ratings: Sequence[int]) -> None:
    if len(ratings) != TERM_COUNT:
        raise InvalidRatingsError(f"Expected {TERM_COUNT} ratings, got {len(ratings)}.")
    for index, value in enumerate(ratings):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRatingsError(f"Rating {index} must be an integer.")
        if not MIN_RATING <= value <= MAX_RATING:
            raise InvalidRatingsError(
                f"Rating {index} must be between {MIN_RATING} and {MAX_RATING}, got {value}."
            )


def compute_trait_scores(ratings: Sequence[int]) -> TraitScores:
    validate_ratings(ratings)
    averages = {
        trait: sum(ratings[index] for index in indices) / len(indices)
        for trait, indices in TRAIT_INDEX_GROUPS.items()
    }
    return TraitScores(**averages)


def dominant_trait(scores: TraitScores) -> str:
    values = scores.as_dict()
    best_trait = TRAIT_ORDER[0]
    best_value = values[best_trait]
    for trait in TRAIT_ORDER[1:]:
        # strict comparison keeps the earliest trait on ties
        if values[trait] > best_value:
            best_trait = trait
            best_value = values[trait]
    return best_trait


def score_personality(ratings: Sequence[int]) -> Archetype:
    return archetype_for_trait(dominant_trait(compute_trait_scores(ratings)))
