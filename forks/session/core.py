"""LifeSession — wires the engines to catalogues and persistence, and drives a playthrough."""

from __future__ import annotations

import random
from typing import Any, Optional

from loguru import logger

from forks.catalogue.loader import Question, load_questions, load_scenario_catalogue
from forks.config import Settings, get_settings
from forks.errors import CatalogueLoadError
from forks.personality.traits import TraitEngine
from forks.simulation.engine import LifeSimEngine, RandomSource
from forks.simulation.models import EventRecord, Scenario
from forks.storage.database import Database
from forks.storage.session_store import SessionStore


class LifeSession:
    """
    One user's playthrough: personality assessment, then a branching life.

    Flow:
        session = LifeSession()
        await session.start()                 # load catalogues, open store
        session.begin_assessment()
        while not session.assessment_complete:
            session.answer(choice_index)
        session.begin_simulation()
        while (scenario := session.next_scenario()) is not None:
            session.choose(choice_id)
        session.final_reflection()
        await session.stop()

    Calls must be serialised by the caller; nothing here is thread-safe.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._settings = settings or get_settings()
        if rng is None:
            rng = random.Random(self._settings.rng_seed)

        self.traits = TraitEngine()
        self.sim = LifeSimEngine(
            self.traits,
            rng=rng,
            start_age=self._settings.start_age,
            end_age=self._settings.end_age,
            min_events_before_exhaustion=self._settings.min_events_before_exhaustion,
        )

        self._db = Database(self._settings.db_path)
        self._store = SessionStore(self._db)

        self.questions: list[Question] = []
        self.question_index = 0
        self.current_scenario: Optional[Scenario] = None
        self._started = False

    async def start(self) -> bool:
        """Load both catalogues and open the store. Returns False if a catalogue failed."""
        if not self._started:
            await self._db.connect()
            self._started = True

        loaded = True
        try:
            self.questions = await load_questions(self._settings.questions_path)
        except CatalogueLoadError as e:
            logger.error(f"Failed to load questions: {e}")
            loaded = False

        try:
            catalogue = await load_scenario_catalogue(self._settings.scenarios_path)
        except CatalogueLoadError as e:
            logger.error(f"Failed to load scenarios: {e}")
            loaded = False
        else:
            self.sim.load_scenarios(catalogue)

        logger.info(
            f"Session started: {len(self.questions)} questions, "
            f"{len(self.sim.scenarios)} scenarios"
        )
        return loaded

    async def stop(self) -> None:
        if self._started:
            await self._db.close()
            self._started = False

    # ── Assessment ────────────────────────────────────────────────

    def begin_assessment(self) -> None:
        self.traits.reset()
        self.question_index = 0

    @property
    def current_question(self) -> Optional[Question]:
        if self.question_index < len(self.questions):
            return self.questions[self.question_index]
        return None

    @property
    def assessment_complete(self) -> bool:
        return self.question_index >= len(self.questions)

    @property
    def assessment_progress(self) -> tuple[int, int]:
        """(answered, total)"""
        return self.question_index, len(self.questions)

    def answer(self, choice_index: int) -> bool:
        """Score one answer. Returns True while more questions remain."""
        question = self.current_question
        if question is None:
            raise RuntimeError("Assessment is already complete")
        choice = question.choices[choice_index]
        self.traits.apply_weights(choice.weights)
        self.question_index += 1
        return not self.assessment_complete

    # ── Simulation ────────────────────────────────────────────────

    def begin_simulation(self) -> None:
        self.sim.reset()
        self.current_scenario = None

    def next_scenario(self) -> Optional[Scenario]:
        """The next scenario to present, or None once the life is over."""
        if self.sim.should_end_simulation():
            self.current_scenario = None
        else:
            self.current_scenario = self.sim.select_next_scenario()
        return self.current_scenario

    def choice_hints(self) -> dict[str, str]:
        if self.current_scenario is None:
            return {}
        return {c.id: self.sim.get_choice_alignment(c) for c in self.current_scenario.choices}

    def choose(self, choice_id: str) -> EventRecord:
        if self.current_scenario is None:
            raise RuntimeError("No scenario is being presented")
        choice = self.current_scenario.get_choice(choice_id)
        return self.sim.process_choice(self.current_scenario, choice)

    def reflection_prompt(self) -> Optional[str]:
        if self.current_scenario is None:
            return None
        return self.sim.get_reflection_prompt(self.current_scenario)

    def explore_branch(self) -> None:
        """Replay the life with the same personality."""
        self.begin_simulation()

    def reset_all(self) -> None:
        self.traits.reset()
        self.question_index = 0
        self.begin_simulation()

    def final_reflection(self) -> str:
        summary = self.traits.generate_summary()
        mbti = summary["mbti"]
        label = mbti["description"].split(" - ")[0]
        tendencies = ", ".join(summary["trajectories"][:3]) or "a unique path"
        return f"You emerged as {mbti['type']} ({label}), with tendencies toward: {tendencies}."

    # ── Persistence ───────────────────────────────────────────────

    def snapshot(self) -> dict[str, Any]:
        return {"personality": self.traits.get_state(), "events": self.sim.get_state()}

    async def save(self) -> str:
        return await self._store.save(
            self._settings.save_slot, self.traits.get_state(), self.sim.get_state()
        )

    async def load(self) -> bool:
        state = await self._store.load(self._settings.save_slot)
        if state is None:
            return False
        self.traits.restore_state(state["personality"])
        self.sim.restore_state(state["events"])
        self.question_index = len(self.questions)
        self.current_scenario = None
        return True
