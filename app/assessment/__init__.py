from .archetypes import TRAIT_ORDER, Archetype, archetype_for_trait, load_archetypes
from .job_fit import (
    AlternativePosition,
    JobFitReport,
    estimate_job_fit,
    fit_level,
    load_job_fit_rules,
)
from .terms import ASSESSMENT_TERMS, RATING_SCALE, TERM_COUNT, is_complete
from .traits import (
    InvalidRatingsError,
    TraitScores,
    compute_trait_scores,
    dominant_trait,
    score_personality,
)

__all__ = [
    "ASSESSMENT_TERMS",
    "RATING_SCALE",
    "TERM_COUNT",
    "is_complete",
    "TRAIT_ORDER",
    "Archetype",
    "archetype_for_trait",
    "load_archetypes",
    "TraitScores",
    "InvalidRatingsError",
    "compute_trait_scores",
    "dominant_trait",
    "score_personality",
    "AlternativePosition",
    "JobFitReport",
    "estimate_job_fit",
    "fit_level",
    "load_job_fit_rules",
]
