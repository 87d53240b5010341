from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from app.core.rules import load_rules

TRAIT_ORDER: tuple[str, ...] = (
    "dominance",
    "influence",
    "steadiness",
    "conscientiousness",
    "empathy",
    "adaptability",
)


class Archetype(BaseModel):
    model_config = ConfigDict(frozen=True)

    trait: str
    primary_type: str
    description: str
    strengths: tuple[str, ...] = Field(min_length=3)
    challenges: tuple[str, ...] = Field(min_length=2)
    work_style: str
    communication_style: str
    ideal_environment: str
    leadership_style: str
    team_role: str
    motivators: tuple[str, ...]
    stressors: tuple[str, ...]
    career_suggestions: tuple[str, ...]
    development_areas: tuple[str, ...]
    management_tips: tuple[str, ...]


@lru_cache(maxsize=1)
def load_archetypes() -> Mapping[str, Archetype]:
    raw = load_rules("archetypes")
    entries = raw.get("archetypes")
    if not isinstance(entries, dict) or not entries:
        raise RuntimeError("Archetype table must define a non-empty 'archetypes' mapping.")

    table: dict[str, Archetype] = {}
    for trait, fields in entries.items():
        if trait not in TRAIT_ORDER:
            raise RuntimeError(f"Archetype table references unknown trait '{trait}'.")
        table[trait] = Archetype(trait=trait, **fields)
    return MappingProxyType(table)


def default_trait() -> str:
    trait = str(load_rules("archetypes").get("default_trait") or "steadiness")
    if trait not in load_archetypes():
        raise RuntimeError(f"Default archetype trait '{trait}' has no descriptor.")
    return trait


def archetype_for_trait(trait: str) -> Archetype:
    table = load_archetypes()
    archetype = table.get(trait)
    if archetype is None:
        return table[default_trait()]
    return archetype


def archetype_labels() -> tuple[str, ...]:
    return tuple(archetype.primary_type for archetype in load_archetypes().values())
