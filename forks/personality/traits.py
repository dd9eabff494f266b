"""
TraitEngine — continuous OCEAN personality state with derived labels.

Every trait is a number from 0 to 100 (50 = neutral midpoint). Each trait
carries a confidence band that narrows as evidence arrives, and the engine
also tracks a stress scalar and how often each trajectory tag was earned.

Inputs are tolerated rather than validated: unknown trait keys are skipped
and every mutation clamps back into range.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from loguru import logger

from forks.config.constants import (
    ALIGNMENT_BASE,
    CONFIDENCE_FLOOR,
    CONFIDENCE_STEP,
    DEFAULT_CONFIDENCE,
    DEFAULT_STRESS,
    DEFAULT_TRAIT_VALUE,
    DEFAULT_TRAJECTORY_COUNT,
    HIGH_TRAIT_THRESHOLD,
    LOW_TRAIT_THRESHOLD,
    NEUTRAL_PROBABILITY,
    PROBABILITY_CEILING,
    PROBABILITY_FLOOR,
    STRESS_MAX,
    STRESS_MIN,
    STRESS_RELIEF_FACTOR,
    STRESS_STRAIN_FACTOR,
    STRESS_STRAIN_THRESHOLD,
    TRAIT_KEYS,
    TRAIT_MAX,
    TRAIT_MIDPOINT,
    TRAIT_MIN,
    TRAIT_NAMES,
    WEIGHT_DIVISOR,
)
from forks.personality import typology

if TYPE_CHECKING:
    from forks.simulation.models import Choice


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class TraitEngine:
    """
    Owns the trait vector, confidence bands, stress and trajectory tag counts.

    Usage:
        traits = TraitEngine()
        traits.apply_weights({"E": 10, "N": -5})
        traits.apply_stress(15)
        traits.add_trajectory_tags(["creative", "risk_taker"])
        traits.derive_mbti()            # "ENFJ"
        summary = traits.generate_summary()
    """

    trait_names = TRAIT_NAMES

    def __init__(
        self,
        initial_trait: float = DEFAULT_TRAIT_VALUE,
        initial_confidence: float = DEFAULT_CONFIDENCE,
        initial_stress: float = DEFAULT_STRESS,
        confidence_step: float = CONFIDENCE_STEP,
    ) -> None:
        self._initial_trait = initial_trait
        self._initial_confidence = initial_confidence
        self._initial_stress = initial_stress
        self._confidence_step = confidence_step

        self.ocean: dict[str, float] = {}
        self.confidence: dict[str, float] = {}
        self.stress: float = initial_stress
        self.trajectory_tags: dict[str, int] = {}
        self.reset()

    def reset(self) -> None:
        self.ocean = {k: self._initial_trait for k in TRAIT_KEYS}
        self.confidence = {k: self._initial_confidence for k in TRAIT_KEYS}
        self.stress = self._initial_stress
        self.trajectory_tags = {}

    # ── Mutation ──────────────────────────────────────────────────

    def apply_weights(self, weights: Mapping[str, float]) -> None:
        """
        Shift each recognised trait by its signed delta.

        Keys outside O/C/E/A/N are ignored so partially specified weight maps
        from content files still apply what they can. Every touched trait also
        narrows its confidence band by one step.
        """
        for trait, delta in weights.items():
            if trait not in self.ocean:
                continue
            self.ocean[trait] = _clamp(self.ocean[trait] + delta, TRAIT_MIN, TRAIT_MAX)
            self.confidence[trait] = max(CONFIDENCE_FLOOR, self.confidence[trait] - self._confidence_step)

    def apply_stress(self, delta: float) -> None:
        self.stress = _clamp(self.stress + delta, STRESS_MIN, STRESS_MAX)

    def add_trajectory_tags(self, tags: Iterable[str]) -> None:
        for tag in tags:
            self.trajectory_tags[tag] = self.trajectory_tags.get(tag, 0) + 1

    # ── Queries ───────────────────────────────────────────────────

    def get_dominant_trajectories(self, count: int = DEFAULT_TRAJECTORY_COUNT) -> list[str]:
        """Most frequent tags first. Equal counts keep the order tags were first earned."""
        ranked = sorted(self.trajectory_tags.items(), key=lambda item: -item[1])
        return [tag for tag, _ in ranked[:count]]

    def get_trait_level(self, trait: str) -> str:
        return typology.trait_level(self.ocean[trait])

    def derive_mbti(self) -> str:
        return typology.derive_mbti(self.ocean)

    def get_mbti_description(self) -> dict[str, str]:
        code = self.derive_mbti()
        return {"type": code, "description": typology.describe_mbti(code)}

    def derive_enneagram(self) -> dict[str, Any]:
        type_id = typology.derive_enneagram(self.ocean)
        return {"type": type_id, "description": typology.describe_enneagram(type_id)}

    def calculate_choice_probability(self, choice: Choice) -> float:
        """
        How naturally this personality gravitates to a choice, 10-90.

        Choices without a weight map score a flat 0.5. Positive weights
        reward a high trait, negative weights reward a low one, and the
        current stress level pulls toward relief and away from strain.
        """
        if choice.ocean_weights is None:
            return NEUTRAL_PROBABILITY

        alignment = float(ALIGNMENT_BASE)
        for trait, weight in choice.ocean_weights.items():
            if trait not in self.ocean:
                continue
            value = self.ocean[trait]
            if weight > 0:
                alignment += (value - TRAIT_MIDPOINT) * (weight / WEIGHT_DIVISOR)
            else:
                alignment += (TRAIT_MIDPOINT - value) * (abs(weight) / WEIGHT_DIVISOR)

        stress_delta = choice.stress_delta
        if stress_delta is not None:
            if stress_delta < 0:
                alignment += self.stress * STRESS_RELIEF_FACTOR
            elif stress_delta > STRESS_STRAIN_THRESHOLD:
                alignment -= self.stress * STRESS_STRAIN_FACTOR

        return _clamp(alignment, PROBABILITY_FLOOR, PROBABILITY_CEILING)

    def generate_summary(self) -> dict[str, Any]:
        """End-of-life narrative snapshot: labels, extreme traits, stress, trajectories."""
        return {
            "mbti": self.get_mbti_description(),
            "enneagram": self.derive_enneagram(),
            "high_traits": [TRAIT_NAMES[k] for k, v in self.ocean.items() if v >= HIGH_TRAIT_THRESHOLD],
            "low_traits": [TRAIT_NAMES[k] for k, v in self.ocean.items() if v <= LOW_TRAIT_THRESHOLD],
            "stress_level": self.stress,
            "trajectories": self.get_dominant_trajectories(),
        }

    def format_status(self) -> str:
        """Single-line status for display."""
        traits = " | ".join(f"{k}={round(self.ocean[k])}" for k in TRAIT_KEYS)
        return f"Personality: {traits} | stress={round(self.stress)}"

    # ── Snapshot ──────────────────────────────────────────────────

    def get_state(self) -> dict[str, Any]:
        return {
            "ocean": dict(self.ocean),
            "confidence": dict(self.confidence),
            "stress": self.stress,
            "trajectory_tags": dict(self.trajectory_tags),
        }

    def restore_state(self, state: Mapping[str, Any]) -> None:
        self.ocean = dict(state["ocean"])
        self.confidence = dict(state["confidence"])
        self.stress = state["stress"]
        self.trajectory_tags = dict(state["trajectory_tags"])
        logger.debug(f"Trait state restored: {self.format_status()}")
