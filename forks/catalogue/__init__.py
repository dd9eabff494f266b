from .loader import (
    Question,
    QuestionChoice,
    ScenarioCatalogue,
    load_questions,
    load_scenario_catalogue,
    parse_questions,
    parse_scenario_catalogue,
)

__all__ = [
    "Question",
    "QuestionChoice",
    "ScenarioCatalogue",
    "load_questions",
    "load_scenario_catalogue",
    "parse_questions",
    "parse_scenario_catalogue",
]
