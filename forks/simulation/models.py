"""Life simulation data models — stages, scenarios, choices, and recorded events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from forks.config.constants import ANY_STAGE, STAGE_TABLE


class LifeStage(str, Enum):
    EARLY = "early"    # up to 25
    MID   = "mid"      # 26-50
    LATER = "later"    # 51 onward

    @classmethod
    def for_age(cls, age: int) -> "LifeStage":
        if age <= 25:
            return cls.EARLY
        if age <= 50:
            return cls.MID
        return cls.LATER


@dataclass(frozen=True)
class StageBand:
    min_age: int
    max_age: int
    label: str


STAGES: dict[LifeStage, StageBand] = {
    LifeStage(key): StageBand(min_age, max_age, label)
    for key, (min_age, max_age, label) in STAGE_TABLE.items()
}


@dataclass(frozen=True)
class Choice:
    """One selectable option inside a scenario."""

    id: str
    title: str
    description: str = ""
    outcome: str = ""
    ocean_weights: Optional[dict[str, float]] = None   # None = no trait effect
    stress_delta: Optional[float] = None
    trajectory_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Scenario:
    """A narrative decision point, immutable once loaded from the catalogue."""

    id: str
    title: str
    life_stage: str                      # a LifeStage value or "any"
    age_range: tuple[int, int]           # inclusive
    choices: tuple[Choice, ...]
    description: str = ""
    context_tags: tuple[str, ...] = ()
    reflection_prompts: tuple[str, ...] = ()

    def matches(self, stage: LifeStage, age: int) -> bool:
        """Eligible for this stage (or any stage) and age, bounds inclusive."""
        if self.life_stage != ANY_STAGE and self.life_stage != stage.value:
            return False
        min_age, max_age = self.age_range
        return min_age <= age <= max_age

    def get_choice(self, choice_id: str) -> Choice:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        raise KeyError(f"Scenario '{self.id}' has no choice '{choice_id}'")


@dataclass(frozen=True)
class EventRecord:
    """A resolved choice, appended to the life history and never edited."""

    scenario_id: str
    title: str
    choice_id: str
    choice_title: str
    age: int
    stage: str
    outcome: str
    ocean_before: Mapping[str, float]
    stress_before: float
    ocean_after: Mapping[str, float]
    stress_after: float
    ocean_changes: Mapping[str, float] = field(default_factory=dict)   # nonzero deltas only

    def __post_init__(self) -> None:
        # Read-only copies; callers keep their own dicts.
        for name in ("ocean_before", "ocean_after", "ocean_changes"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario_id": self.scenario_id,
            "title": self.title,
            "choice_id": self.choice_id,
            "choice_title": self.choice_title,
            "age": self.age,
            "stage": self.stage,
            "outcome": self.outcome,
            "ocean_before": dict(self.ocean_before),
            "stress_before": self.stress_before,
            "ocean_after": dict(self.ocean_after),
            "stress_after": self.stress_after,
            "ocean_changes": dict(self.ocean_changes),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "EventRecord":
        return cls(
            scenario_id=d["scenario_id"],
            title=d["title"],
            choice_id=d["choice_id"],
            choice_title=d["choice_title"],
            age=d["age"],
            stage=d["stage"],
            outcome=d.get("outcome", ""),
            ocean_before=dict(d["ocean_before"]),
            stress_before=d["stress_before"],
            ocean_after=dict(d["ocean_after"]),
            stress_after=d["stress_after"],
            ocean_changes=dict(d.get("ocean_changes", {})),
        )
