"""
Pytest configuration and shared fixtures.

Randomness is injected: SequenceRandom replays a fixed list of values so
scenario selection and age jitter are fully predictable.
"""

import pytest

from forks.config import Settings
from forks.personality.traits import TraitEngine
from forks.simulation.engine import LifeSimEngine


class SequenceRandom:
    """Stand-in random source returning the given values in a loop."""

    def __init__(self, *values: float) -> None:
        self._values = list(values) or [0.0]
        self._i = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[self._i % len(self._values)]
        self._i += 1
        self.calls += 1
        return value


@pytest.fixture
def make_rng():
    return SequenceRandom


@pytest.fixture
def sample_catalogue() -> dict:
    return {
        "scenarios": [
            {
                "id": "job",
                "title": "First Job",
                "description": "Pick a job.",
                "life_stage": "early",
                "age_range": [18, 25],
                "context_tags": ["career"],
                "choices": [
                    {
                        "id": "steady",
                        "title": "The steady option",
                        "outcome": "You settle in.",
                        "ocean_weights": {"C": 15},
                        "stress_delta": -10,
                        "trajectory_tags": ["career_driven"],
                    },
                    {"id": "drift", "title": "Drift for a while", "outcome": "Time passes."},
                ],
                "reflection_prompts": ["Was it worth it?", "What did you give up?"],
            },
            {
                "id": "home",
                "title": "Leaving Home",
                "life_stage": "early",
                "age_range": [18, 25],
                "context_tags": ["family"],
                "choices": [{"id": "go", "title": "Go", "ocean_weights": {"O": 5}}],
            },
            {
                "id": "mortgage",
                "title": "A Mortgage",
                "life_stage": "mid",
                "age_range": [26, 50],
                "context_tags": ["money"],
                "choices": [{"id": "sign", "title": "Sign", "stress_delta": 12}],
            },
            {
                "id": "windfall",
                "title": "Windfall",
                "life_stage": "any",
                "age_range": [18, 80],
                "context_tags": ["risk"],
                "choices": [{"id": "spend", "title": "Spend it", "trajectory_tags": ["risk_taker"]}],
            },
            {
                "id": "late_start",
                "title": "Late Start",
                "life_stage": "early",
                "age_range": [20, 25],
                "context_tags": [],
                "choices": [{"id": "ok", "title": "Okay"}],
            },
        ],
        "trajectory_descriptions": {"career_driven": "Climbs the ladder"},
        "global_modifiers": {"difficulty": "normal"},
    }


@pytest.fixture
def traits() -> TraitEngine:
    return TraitEngine()


@pytest.fixture
def sim(traits, sample_catalogue) -> LifeSimEngine:
    engine = LifeSimEngine(traits, rng=SequenceRandom(0.0))
    assert engine.load_scenarios(sample_catalogue)
    return engine


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "forks.db",
        log_dir=tmp_path / "logs",
    )
