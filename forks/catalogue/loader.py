"""
Catalogue loading — assessment questions and life scenarios from JSON documents.

Documents are read once at session start. Required fields are checked at
load time so a malformed entry fails the whole load with CatalogueLoadError
instead of surfacing mid-simulation; optional fields default to empty values.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from loguru import logger

from forks.errors import CatalogueLoadError
from forks.simulation.models import Choice, Scenario


@dataclass(frozen=True)
class QuestionChoice:
    text: str
    weights: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Question:
    text: str
    choices: tuple[QuestionChoice, ...]
    id: str = ""


@dataclass
class ScenarioCatalogue:
    scenarios: list[Scenario] = field(default_factory=list)
    trajectory_descriptions: dict[str, str] = field(default_factory=dict)
    global_modifiers: dict[str, Any] = field(default_factory=dict)


def _require(entry: Mapping[str, Any], key: str, source: str, where: str) -> Any:
    if not isinstance(entry, Mapping) or key not in entry:
        raise CatalogueLoadError(source, f"{where} is missing required field '{key}'")
    return entry[key]


def _list_of(value: Any, key: str, source: str, where: str) -> list:
    if not isinstance(value, list):
        raise CatalogueLoadError(source, f"{where}: '{key}' must be a list, got {type(value).__name__}")
    return value


def _optional_list(entry: Mapping[str, Any], key: str, source: str, where: str) -> tuple:
    value = entry.get(key)
    if value is None:
        return ()
    return tuple(_list_of(value, key, source, where))


def _optional_mapping(entry: Mapping[str, Any], key: str, source: str, where: str) -> dict | None:
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise CatalogueLoadError(source, f"{where}: '{key}' must be an object, got {type(value).__name__}")
    return dict(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ── Parsing ───────────────────────────────────────────────────────

def parse_choice(raw: Mapping[str, Any], source: str = "<memory>", where: str = "choice") -> Choice:
    choice_id = _require(raw, "id", source, where)
    where = f"{where} '{choice_id}'"
    stress_delta = raw.get("stress_delta")
    if stress_delta is not None and not _is_number(stress_delta):
        raise CatalogueLoadError(source, f"{where}: 'stress_delta' must be a number")
    return Choice(
        id=str(choice_id),
        title=_require(raw, "title", source, where),
        description=raw.get("description", ""),
        outcome=raw.get("outcome", ""),
        ocean_weights=_optional_mapping(raw, "ocean_weights", source, where),
        stress_delta=stress_delta,
        trajectory_tags=_optional_list(raw, "trajectory_tags", source, where),
    )


def parse_scenario(raw: Mapping[str, Any], source: str = "<memory>") -> Scenario:
    scenario_id = _require(raw, "id", source, "scenario")
    where = f"scenario '{scenario_id}'"
    age_range = _require(raw, "age_range", source, where)
    if not (
        isinstance(age_range, (list, tuple))
        and len(age_range) == 2
        and all(_is_number(bound) for bound in age_range)
    ):
        raise CatalogueLoadError(source, f"{where} has an invalid age_range {age_range!r}")
    min_age, max_age = age_range

    raw_choices = _list_of(_require(raw, "choices", source, where), "choices", source, where)
    choices = tuple(
        parse_choice(c, source, f"{where} choice #{i}") for i, c in enumerate(raw_choices)
    )
    return Scenario(
        id=str(scenario_id),
        title=_require(raw, "title", source, where),
        life_stage=_require(raw, "life_stage", source, where),
        age_range=(min_age, max_age),
        choices=choices,
        description=raw.get("description", ""),
        context_tags=_optional_list(raw, "context_tags", source, where),
        reflection_prompts=_optional_list(raw, "reflection_prompts", source, where),
    )


def parse_scenario_catalogue(data: Any, source: str = "<memory>") -> ScenarioCatalogue:
    raw_scenarios = _require(data, "scenarios", source, "catalogue")
    if not isinstance(raw_scenarios, list):
        raise CatalogueLoadError(source, "'scenarios' must be a list")
    try:
        return ScenarioCatalogue(
            scenarios=[parse_scenario(s, source) for s in raw_scenarios],
            trajectory_descriptions=_optional_mapping(data, "trajectory_descriptions", source, "catalogue") or {},
            global_modifiers=_optional_mapping(data, "global_modifiers", source, "catalogue") or {},
        )
    except (TypeError, ValueError) as e:
        raise CatalogueLoadError(source, f"malformed entry ({e})") from e


def parse_questions(data: Any, source: str = "<memory>") -> list[Question]:
    raw_questions = _require(data, "questions", source, "catalogue")
    if not isinstance(raw_questions, list):
        raise CatalogueLoadError(source, "'questions' must be a list")

    questions = []
    for i, raw in enumerate(raw_questions):
        where = f"question #{i}"
        text = _require(raw, "text", source, where)
        raw_choices = _list_of(_require(raw, "choices", source, where), "choices", source, where)
        choices = tuple(
            QuestionChoice(
                text=_require(c, "text", source, f"{where} choice #{j}"),
                weights=_optional_mapping(c, "weights", source, f"{where} choice #{j}") or {},
            )
            for j, c in enumerate(raw_choices)
        )
        questions.append(Question(text=text, choices=choices, id=str(raw.get("id", i))))
    return questions


# ── File loading ──────────────────────────────────────────────────

async def read_json_document(path: Path) -> Any:
    """Read and decode a JSON file off the event loop."""
    source = str(path)
    loop = asyncio.get_running_loop()
    try:
        text = await loop.run_in_executor(None, path.read_text, "utf-8")
    except OSError as e:
        raise CatalogueLoadError(source, f"unreadable ({e})") from e
    except UnicodeDecodeError as e:
        raise CatalogueLoadError(source, f"not valid UTF-8 ({e})") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogueLoadError(source, f"invalid JSON ({e})") from e


async def load_scenario_catalogue(path: Path) -> ScenarioCatalogue:
    catalogue = parse_scenario_catalogue(await read_json_document(path), str(path))
    logger.info(f"Loaded {len(catalogue.scenarios)} scenarios from {path}")
    return catalogue


async def load_questions(path: Path) -> list[Question]:
    questions = parse_questions(await read_json_document(path), str(path))
    logger.info(f"Loaded {len(questions)} assessment questions from {path}")
    return questions
