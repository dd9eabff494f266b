"""
LifeSimEngine — scenario selection and life progression.

Age drives everything: the life stage is recomputed from it after every
advance, and the eligible scenario set is recomputed from age, stage and
history whenever one of them may have changed. All trait mutation is
delegated to the TraitEngine, whose dominant trajectories in turn bias
which scenario comes next.
"""

from __future__ import annotations

import math
import random
from typing import Any, Mapping, Optional, Protocol

from loguru import logger

from forks.catalogue.loader import ScenarioCatalogue, parse_scenario_catalogue
from forks.config.constants import (
    AGE_ADVANCE,
    ALIGNMENT_AGAINST,
    ALIGNMENT_SOMEWHAT,
    ALIGNMENT_STRETCH,
    ALIGNMENT_STRONG,
    DEFAULT_AGE_ADVANCE,
    END_AGE,
    MIN_EVENTS_BEFORE_EXHAUSTION,
    SELECTION_JITTER,
    SHORTLIST_SIZE,
    START_AGE,
    TRAJECTORY_BIAS_TAGS,
    TRAJECTORY_MATCH_BONUS,
)
from forks.errors import CatalogueLoadError
from forks.personality.traits import TraitEngine
from forks.simulation.models import (
    STAGES,
    Choice,
    EventRecord,
    LifeStage,
    Scenario,
)


class RandomSource(Protocol):
    def random(self) -> float: ...


def tags_overlap(tag: str, trajectory: str) -> bool:
    """Loose match: either tag contains the other as a substring."""
    return tag in trajectory or trajectory in tag


class LifeSimEngine:
    """
    Owns the scenario catalogue, current age/stage and the event history.

    Usage:
        sim = LifeSimEngine(traits, rng=random.Random(7))
        sim.load_scenarios(catalogue_dict)
        scenario = sim.select_next_scenario()
        event = sim.process_choice(scenario, scenario.choices[0])
    """

    stages = STAGES

    def __init__(
        self,
        traits: TraitEngine,
        rng: Optional[RandomSource] = None,
        start_age: int = START_AGE,
        end_age: int = END_AGE,
        min_events_before_exhaustion: int = MIN_EVENTS_BEFORE_EXHAUSTION,
    ) -> None:
        self._traits = traits
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._start_age = start_age
        self._end_age = end_age
        self._min_events = min_events_before_exhaustion

        self.scenarios: list[Scenario] = []
        self.trajectory_descriptions: dict[str, str] = {}
        self.global_modifiers: dict[str, Any] = {}

        self.current_age: int = start_age
        self.current_stage: LifeStage = LifeStage.for_age(start_age)
        self.event_history: list[EventRecord] = []
        self.available_scenarios: list[Scenario] = []

    # ── Catalogue ─────────────────────────────────────────────────

    def load_scenarios(self, catalogue: ScenarioCatalogue | Mapping[str, Any]) -> bool:
        """
        Replace the catalogue wholesale.

        Accepts a parsed ScenarioCatalogue or the raw document. Returns False
        and leaves the engine untouched when the document cannot be parsed.
        """
        if not isinstance(catalogue, ScenarioCatalogue):
            try:
                catalogue = parse_scenario_catalogue(catalogue)
            except CatalogueLoadError as e:
                logger.error(f"Failed to load scenarios: {e}")
                return False

        scenarios = list(catalogue.scenarios)
        try:
            available = self._eligible(scenarios)
        except TypeError as e:
            logger.error(f"Failed to load scenarios: {e}")
            return False

        self.scenarios = scenarios
        self.trajectory_descriptions = dict(catalogue.trajectory_descriptions)
        self.global_modifiers = dict(catalogue.global_modifiers)
        self.available_scenarios = available
        logger.debug(
            f"Scenario catalogue replaced: {len(self.scenarios)} total, "
            f"{len(self.available_scenarios)} available"
        )
        return True

    def reset(self) -> None:
        self.current_age = self._start_age
        self.current_stage = LifeStage.for_age(self._start_age)
        self.event_history = []
        self.refresh_available_scenarios()

    def update_stage(self) -> None:
        self.current_stage = LifeStage.for_age(self.current_age)

    def refresh_available_scenarios(self) -> None:
        """Unplayed scenarios eligible for the current stage and age."""
        self.available_scenarios = self._eligible(self.scenarios)

    def _eligible(self, scenarios: list[Scenario]) -> list[Scenario]:
        used_ids = {event.scenario_id for event in self.event_history}
        return [
            scenario
            for scenario in scenarios
            if scenario.id not in used_ids
            and scenario.matches(self.current_stage, self.current_age)
        ]

    # ── Selection ─────────────────────────────────────────────────

    def scenario_weight(self, scenario: Scenario, dominant_tags: list[str]) -> float:
        """1.0 plus a bonus per context tag overlapping a dominant trajectory (no jitter)."""
        weight = 1.0
        for tag in scenario.context_tags:
            if any(tags_overlap(tag, t) for t in dominant_tags):
                weight += TRAJECTORY_MATCH_BONUS
        return weight

    def select_next_scenario(self) -> Optional[Scenario]:
        """
        Pick the next scenario, or None when nothing is eligible.

        Each candidate is weighted by trajectory overlap plus a small random
        jitter; the top three form a shortlist and one is picked uniformly.
        """
        self.refresh_available_scenarios()
        if not self.available_scenarios:
            return None

        dominant = self._traits.get_dominant_trajectories(TRAJECTORY_BIAS_TAGS)
        weighted = [
            (self.scenario_weight(s, dominant) + self._rng.random() * SELECTION_JITTER, s)
            for s in self.available_scenarios
        ]
        weighted.sort(key=lambda item: item[0], reverse=True)

        shortlist = weighted[: min(SHORTLIST_SIZE, len(weighted))]
        _, selected = shortlist[math.floor(self._rng.random() * len(shortlist))]
        logger.debug(
            f"Selected scenario '{selected.id}' at age {self.current_age} "
            f"from {len(self.available_scenarios)} available (trajectories: {dominant})"
        )
        return selected

    # ── Resolution ────────────────────────────────────────────────

    def process_choice(self, scenario: Scenario, choice: Choice) -> EventRecord:
        """Apply a choice's effects, record the event, and move time forward."""
        ocean_before = dict(self._traits.ocean)
        stress_before = self._traits.stress

        if choice.ocean_weights is not None:
            self._traits.apply_weights(choice.ocean_weights)
        if choice.stress_delta is not None:
            self._traits.apply_stress(choice.stress_delta)
        if choice.trajectory_tags:
            self._traits.add_trajectory_tags(choice.trajectory_tags)

        ocean_after = dict(self._traits.ocean)
        changes = {
            trait: ocean_after[trait] - ocean_before[trait]
            for trait in ocean_after
            if ocean_after[trait] - ocean_before[trait] != 0
        }

        event = EventRecord(
            scenario_id=scenario.id,
            title=scenario.title,
            choice_id=choice.id,
            choice_title=choice.title,
            age=self.current_age,
            stage=self.current_stage.value,
            outcome=choice.outcome,
            ocean_before=ocean_before,
            stress_before=stress_before,
            ocean_after=ocean_after,
            stress_after=self._traits.stress,
            ocean_changes=changes,
        )
        self.event_history.append(event)

        advance = self.calculate_age_advance(scenario, choice)
        self.current_age += advance
        self.update_stage()
        self.refresh_available_scenarios()
        logger.debug(
            f"Resolved '{scenario.id}' → '{choice.id}': changes={changes}, "
            f"age +{advance} → {self.current_age} ({self.current_stage.value})"
        )
        return event

    def calculate_age_advance(self, scenario: Scenario, choice: Choice) -> int:
        """Years passing after an event: a per-stage base plus 0 or 1."""
        base = AGE_ADVANCE.get(self.current_stage.value, DEFAULT_AGE_ADVANCE)
        return base + math.floor(self._rng.random() * 2)

    # ── Narrative helpers ─────────────────────────────────────────

    def get_reflection_prompt(self, scenario: Scenario) -> Optional[str]:
        prompts = scenario.reflection_prompts
        if not prompts:
            return None
        return prompts[math.floor(self._rng.random() * len(prompts))]

    def get_choice_alignment(self, choice: Choice) -> str:
        """Qualitative hint for how well a choice suits the current personality."""
        probability = self._traits.calculate_choice_probability(choice)
        if probability > ALIGNMENT_STRONG:
            return "strongly aligned"
        if probability > ALIGNMENT_SOMEWHAT:
            return "somewhat aligned"
        if probability < ALIGNMENT_AGAINST:
            return "against your nature"
        if probability < ALIGNMENT_STRETCH:
            return "a stretch for you"
        return "neutral"

    def get_trajectory_description(self, tag: str) -> str:
        return self.trajectory_descriptions.get(tag, tag)

    def stage_label(self, stage: LifeStage | str | None = None) -> str:
        key = LifeStage(stage) if stage is not None else self.current_stage
        return self.stages[key].label

    def should_end_simulation(self) -> bool:
        if self.current_age >= self._end_age:
            return True
        self.refresh_available_scenarios()
        return not self.available_scenarios and len(self.event_history) >= self._min_events

    def get_timeline(self) -> list[dict[str, Any]]:
        return [
            {
                "age": event.age,
                "stage": event.stage,
                "title": event.title,
                "choice": event.choice_title,
                "outcome": event.outcome,
            }
            for event in self.event_history
        ]

    # ── Snapshot ──────────────────────────────────────────────────

    def get_state(self) -> dict[str, Any]:
        return {
            "current_age": self.current_age,
            "current_stage": self.current_stage.value,
            "event_history": [event.to_dict() for event in self.event_history],
        }

    def restore_state(self, state: Mapping[str, Any]) -> None:
        self.current_age = state["current_age"]
        self.current_stage = LifeStage(state["current_stage"])
        self.event_history = [EventRecord.from_dict(e) for e in state["event_history"]]
        self.refresh_available_scenarios()
        logger.debug(
            f"Simulation state restored: age {self.current_age}, "
            f"{len(self.event_history)} events"
        )
