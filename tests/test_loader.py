"""Tests for catalogue parsing and async file loading."""

import json

import pytest

from forks.catalogue.loader import (
    load_questions,
    load_scenario_catalogue,
    parse_questions,
    parse_scenario_catalogue,
)
from forks.config.settings import BUNDLED_DATA_DIR
from forks.errors import CatalogueLoadError


class TestParsing:

    def test_optional_fields_default(self, sample_catalogue):
        catalogue = parse_scenario_catalogue(sample_catalogue)
        home = catalogue.scenarios[1]
        go = home.choices[0]

        assert home.description == ""
        assert home.reflection_prompts == ()
        assert go.outcome == ""
        assert go.stress_delta is None
        assert go.trajectory_tags == ()
        assert home.age_range == (18, 25)

    def test_missing_weights_differs_from_empty_weights(self):
        catalogue = parse_scenario_catalogue({"scenarios": [{
            "id": "s", "title": "S", "life_stage": "any", "age_range": [0, 99],
            "choices": [{"id": "a", "title": "A"}, {"id": "b", "title": "B", "ocean_weights": {}}],
        }]})
        a, b = catalogue.scenarios[0].choices

        assert a.ocean_weights is None
        assert b.ocean_weights == {}

    @pytest.mark.parametrize("field", ["id", "title", "life_stage", "age_range", "choices"])
    def test_scenario_missing_required_field(self, sample_catalogue, field):
        del sample_catalogue["scenarios"][0][field]

        with pytest.raises(CatalogueLoadError):
            parse_scenario_catalogue(sample_catalogue)

    def test_choice_missing_title(self, sample_catalogue):
        del sample_catalogue["scenarios"][0]["choices"][1]["title"]

        with pytest.raises(CatalogueLoadError, match="title"):
            parse_scenario_catalogue(sample_catalogue)

    def test_bad_age_range(self, sample_catalogue):
        sample_catalogue["scenarios"][0]["age_range"] = [18]

        with pytest.raises(CatalogueLoadError, match="age_range"):
            parse_scenario_catalogue(sample_catalogue)

    @pytest.mark.parametrize(
        "field,value",
        [("choices", 5), ("choices", {"id": "a"}), ("age_range", "ab"),
         ("age_range", [18, "25"]), ("age_range", [True, 25]), ("reflection_prompts", "why?")],
    )
    def test_scenario_field_of_wrong_type(self, sample_catalogue, field, value):
        sample_catalogue["scenarios"][0][field] = value

        with pytest.raises(CatalogueLoadError, match=field):
            parse_scenario_catalogue(sample_catalogue)

    @pytest.mark.parametrize(
        "field,value", [("ocean_weights", [1, 2]), ("trajectory_tags", "career"), ("stress_delta", "high")],
    )
    def test_choice_field_of_wrong_type(self, sample_catalogue, field, value):
        sample_catalogue["scenarios"][0]["choices"][0][field] = value

        with pytest.raises(CatalogueLoadError, match=field):
            parse_scenario_catalogue(sample_catalogue)

    @pytest.mark.parametrize("field", ["trajectory_descriptions", "global_modifiers"])
    def test_catalogue_maps_must_be_objects(self, sample_catalogue, field):
        sample_catalogue[field] = ["not", "a", "map"]

        with pytest.raises(CatalogueLoadError, match=field):
            parse_scenario_catalogue(sample_catalogue)

    def test_question_choices_must_be_list(self):
        with pytest.raises(CatalogueLoadError, match="choices"):
            parse_questions({"questions": [{"text": "Q1?", "choices": "yes"}]})

    def test_scenarios_must_be_list(self):
        with pytest.raises(CatalogueLoadError):
            parse_scenario_catalogue({"scenarios": {"id": "x"}})

    def test_parse_questions(self):
        questions = parse_questions({"questions": [
            {"text": "Q1?", "choices": [{"text": "yes", "weights": {"E": 5}}, {"text": "no"}]},
        ]})

        assert questions[0].text == "Q1?"
        assert questions[0].id == "0"
        assert questions[0].choices[0].weights == {"E": 5}
        assert questions[0].choices[1].weights == {}

    def test_question_missing_choices(self):
        with pytest.raises(CatalogueLoadError):
            parse_questions({"questions": [{"text": "Q1?"}]})


class TestFileLoading:

    @pytest.mark.asyncio
    async def test_load_from_file(self, tmp_path, sample_catalogue):
        path = tmp_path / "scenarios.json"
        path.write_text(json.dumps(sample_catalogue), encoding="utf-8")

        catalogue = await load_scenario_catalogue(path)

        assert [s.id for s in catalogue.scenarios][:2] == ["job", "home"]
        assert catalogue.trajectory_descriptions == {"career_driven": "Climbs the ladder"}

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogueLoadError, match="unreadable"):
            await load_scenario_catalogue(tmp_path / "nope.json")

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogueLoadError, match="invalid JSON"):
            await load_questions(path)

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "scenarios.json"
        path.write_bytes(b'{"scenarios": ["\xff\xfe"]}')

        with pytest.raises(CatalogueLoadError, match="UTF-8"):
            await load_scenario_catalogue(path)

    @pytest.mark.asyncio
    async def test_bundled_catalogues_are_valid(self):
        catalogue = await load_scenario_catalogue(BUNDLED_DATA_DIR / "scenarios.json")
        questions = await load_questions(BUNDLED_DATA_DIR / "questions.json")

        ids = [s.id for s in catalogue.scenarios]
        assert len(ids) == len(set(ids))
        assert questions
        for scenario in catalogue.scenarios:
            assert scenario.life_stage in {"early", "mid", "later", "any"}
            assert scenario.age_range[0] <= scenario.age_range[1]
            choice_ids = [c.id for c in scenario.choices]
            assert len(choice_ids) == len(set(choice_ids))
