from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field

from app.assessment.archetypes import Archetype
from app.core.rules import get_rule_value, load_rules

logger = logging.getLogger(__name__)

FIT_MIN = 45
FIT_MAX = 98


class AlternativePosition(BaseModel):
    title: str
    fit_percentage: int = Field(ge=0, le=100)
    reasoning: str


class JobFitReport(BaseModel):
    target_position: str
    fit_percentage: int = Field(ge=FIT_MIN, le=FIT_MAX)
    fit_reasoning: str
    strengths_for_role: list[str] = Field(min_length=3, max_length=5)
    challenges_for_role: list[str] = Field(min_length=2, max_length=4)
    alternative_positions: list[AlternativePosition] = Field(min_length=2, max_length=3)
    interview_tips: list[str] = Field(min_length=5, max_length=5)
    development_plan: list[str] = Field(min_length=5, max_length=5)


@dataclass(frozen=True)
class FitLevel:
    label: str
    adjective: str
    color: str


@dataclass(frozen=True)
class FitBranch:
    label_contains: tuple[str, ...]
    base_percentage: int
    strengths_for_role: tuple[str, ...] | None
    challenges_for_role: tuple[str, ...] | None
    alternative_positions: tuple[AlternativePosition, ...] | None

    def matches(self, label: str) -> bool:
        if not self.label_contains:
            return True
        return any(fragment in label for fragment in self.label_contains)


@dataclass(frozen=True)
class KeywordGroup:
    id: str
    keywords: tuple[str, ...]
    branches: tuple[FitBranch, ...]

    def matches(self, title: str) -> bool:
        return any(keyword in title for keyword in self.keywords)


@dataclass(frozen=True)
class JobFitRules:
    generic_base: int
    generic_alternatives: tuple[AlternativePosition, ...]
    groups: tuple[KeywordGroup, ...]
    interview_tips: tuple[str, ...]
    development_plan: tuple[str, ...]
    jitter: int
    min_percentage: int
    max_percentage: int


@dataclass(frozen=True)
class FitSelection:
    group_id: str | None
    base_percentage: int
    strengths_for_role: list[str]
    challenges_for_role: list[str]
    alternative_positions: list[AlternativePosition]


_FIT_LEVELS: tuple[tuple[int, FitLevel], ...] = (
    (85, FitLevel(label="Excellent Match", adjective="excellent", color="#10b981")),
    (75, FitLevel(label="Strong Match", adjective="strong", color="#3b82f6")),
    (65, FitLevel(label="Good Match", adjective="good", color="#8b5cf6")),
)
_MODERATE = FitLevel(label="Moderate Match", adjective="moderate", color="#f59e0b")


def fit_level(percentage: int) -> FitLevel:
    for threshold, level in _FIT_LEVELS:
        if percentage >= threshold:
            return level
    return _MODERATE


def fit_reasoning(primary_type: str, percentage: int) -> str:
    return (
        f"Based on your {primary_type} personality type, you show "
        f"{fit_level(percentage).adjective} alignment with this role's requirements."
    )


def _strings(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(str(item) for item in value)


def _positions(value: Any) -> tuple[AlternativePosition, ...] | None:
    if value is None:
        return None
    return tuple(AlternativePosition(**item) for item in value)


def _branch(raw: dict[str, Any]) -> FitBranch:
    return FitBranch(
        label_contains=_strings(raw.get("label_contains")) or (),
        base_percentage=int(raw["base_percentage"]),
        strengths_for_role=_strings(raw.get("strengths_for_role")),
        challenges_for_role=_strings(raw.get("challenges_for_role")),
        alternative_positions=_positions(raw.get("alternative_positions")),
    )


@lru_cache(maxsize=1)
def load_job_fit_rules() -> JobFitRules:
    raw = load_rules("job_fit_rules")
    groups: list[KeywordGroup] = []
    for entry in raw.get("groups") or []:
        branches = tuple(_branch(item) for item in entry.get("branches") or [])
        if not branches or branches[-1].label_contains:
            raise RuntimeError(f"Job-fit group '{entry.get('id')}' must end with a catch-all branch.")
        groups.append(
            KeywordGroup(
                id=str(entry["id"]),
                keywords=tuple(str(keyword).lower() for keyword in entry["keywords"]),
                branches=branches,
            )
        )

    rules = JobFitRules(
        generic_base=int(get_rule_value("job_fit_rules", "generic.base_percentage", 65)),
        generic_alternatives=_positions(get_rule_value("job_fit_rules", "generic.alternative_positions")) or (),
        groups=tuple(groups),
        interview_tips=_strings(raw.get("interview_tips")) or (),
        development_plan=_strings(raw.get("development_plan")) or (),
        jitter=int(get_rule_value("job_fit_rules", "jitter", 8)),
        min_percentage=int(get_rule_value("job_fit_rules", "bounds.min", FIT_MIN)),
        max_percentage=int(get_rule_value("job_fit_rules", "bounds.max", FIT_MAX)),
    )
    if len(rules.interview_tips) != 5 or len(rules.development_plan) != 5:
        raise RuntimeError("Job-fit rules must define five interview tips and five development plan items.")
    return rules


def select_fit_branch(archetype: Archetype, job_title: str | None, rules: JobFitRules | None = None) -> FitSelection:
    rules = rules or load_job_fit_rules()
    title = (job_title or "").lower()
    label = archetype.primary_type

    strengths = list(archetype.strengths[:3])
    challenges = list(archetype.challenges[:2])
    alternatives = list(rules.generic_alternatives)

    for group in rules.groups:
        if not group.matches(title):
            continue
        branch = next(branch for branch in group.branches if branch.matches(label))
        return FitSelection(
            group_id=group.id,
            base_percentage=branch.base_percentage,
            strengths_for_role=list(branch.strengths_for_role) if branch.strengths_for_role else strengths,
            challenges_for_role=list(branch.challenges_for_role) if branch.challenges_for_role else challenges,
            alternative_positions=list(branch.alternative_positions) if branch.alternative_positions else alternatives,
        )

    return FitSelection(
        group_id=None,
        base_percentage=rules.generic_base,
        strengths_for_role=strengths,
        challenges_for_role=challenges,
        alternative_positions=alternatives,
    )


def apply_jitter(base: int, rng: random.Random | None = None, rules: JobFitRules | None = None) -> int:
    rules = rules or load_job_fit_rules()
    source = rng or random
    variance = source.randint(-rules.jitter, rules.jitter)
    return max(rules.min_percentage, min(rules.max_percentage, base + variance))


def estimate_job_fit(
    archetype: Archetype,
    job_title: str | None,
    *,
    rng: random.Random | None = None,
) -> JobFitReport:
    rules = load_job_fit_rules()
    selection = select_fit_branch(archetype, job_title, rules)
    percentage = apply_jitter(selection.base_percentage, rng, rules)
    logger.info(
        "job_fit_estimated group=%s base=%s fit=%s type=%s",
        selection.group_id or "generic",
        selection.base_percentage,
        percentage,
        archetype.primary_type,
    )
    return JobFitReport(
        target_position=job_title or "",
        fit_percentage=percentage,
        fit_reasoning=fit_reasoning(archetype.primary_type, percentage),
        strengths_for_role=selection.strengths_for_role,
        challenges_for_role=selection.challenges_for_role,
        alternative_positions=[position.model_copy() for position in selection.alternative_positions],
        interview_tips=list(rules.interview_tips),
        development_plan=list(rules.development_plan),
    )
