"""Tests for YAML scenario parsing."""

from pathlib import Path

import pytest

from browser_scenarios.errors import ScenarioLoadError
from browser_scenarios.scenario import BUILTIN_SCENARIOS
from browser_scenarios.scenario.parser import (
    parse_scenario_data,
    parse_scenario_file,
    parse_scenarios_data,
    parse_step_data,
)
from browser_scenarios.scenario.schema import Step

REPO_ROOT = Path(__file__).resolve().parents[1]


def write(tmp_path, text, name="scenario.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestParseStep:

    def test_short_form_scalar(self):
        assert parse_step_data({"navigate": "https://example.com"}) == Step.navigate("https://example.com")
        assert parse_step_data({"assert_title": "Example"}) == Step.assert_title("Example")

    def test_short_form_mapping(self):
        step = parse_step_data({"fill": {"selector": "#q", "text": "hello"}})
        assert step == Step.fill("#q", "hello")

    def test_short_form_alias(self):
        assert parse_step_data({"goto": "https://example.com"}).type == "navigate"
        assert parse_step_data({"press_key": {"selector": "#q", "key": "Enter"}}).type == "press"

    def test_long_form(self):
        step = parse_step_data({"type": "press", "selector": "#q", "key": "Enter", "extra": 1})
        assert step == Step.press("#q", "Enter")

    def test_values_are_stringified(self):
        assert parse_step_data({"fill": {"selector": "#n", "text": 42}}).text == "42"

    def test_description_is_kept(self):
        step = parse_step_data({"navigate": "https://example.com", "description": "home"})
        assert step.description == "home"

    def test_ambiguous_step_rejected(self):
        with pytest.raises(ScenarioLoadError, match="exactly one step type"):
            parse_step_data({"navigate": "https://a.example", "assert_title": "A"})

    def test_unknown_short_form_rejected(self):
        with pytest.raises(ScenarioLoadError):
            parse_step_data({"click": "#button"})

    def test_scalar_for_mapping_step_rejected(self):
        with pytest.raises(ScenarioLoadError, match="mapping of parameters"):
            parse_step_data({"fill": "#q"})

    def test_non_mapping_rejected(self):
        with pytest.raises(ScenarioLoadError):
            parse_step_data("navigate https://example.com")


class TestParseScenario:

    def test_single_scenario_mapping(self):
        scenario = parse_scenario_data({
            "name": "Home",
            "description": "homepage",
            "steps": [{"navigate": "https://example.com"}],
        })
        assert scenario.name == "Home"
        assert scenario.description == "homepage"
        assert scenario.steps == (Step.navigate("https://example.com"),)

    def test_missing_name(self):
        with pytest.raises(ScenarioLoadError, match="'name'"):
            parse_scenario_data({"steps": []})

    def test_steps_must_be_list(self):
        with pytest.raises(ScenarioLoadError, match="'steps' must be a list"):
            parse_scenario_data({"name": "x", "steps": {"navigate": "https://example.com"}})

    def test_scenarios_list(self):
        scenarios = parse_scenarios_data({"scenarios": [{"name": "a"}, {"name": "b"}]})
        assert [s.name for s in scenarios] == ["a", "b"]

    def test_scenarios_must_be_list(self):
        with pytest.raises(ScenarioLoadError):
            parse_scenarios_data({"scenarios": {"name": "a"}})


class TestParseFile:

    def test_reads_yaml(self, tmp_path):
        path = write(tmp_path, """
name: Verify Google homepage title
steps:
  - navigate: https://www.google.com
  - assert_title: Google
""")
        [scenario] = parse_scenario_file(path)
        assert scenario == BUILTIN_SCENARIOS[0]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_scenario_file(tmp_path / "nope.yaml")

    def test_wrong_suffix(self, tmp_path):
        path = write(tmp_path, "name: x", name="scenario.json")
        with pytest.raises(ScenarioLoadError, match=".yaml or .yml"):
            parse_scenario_file(path)

    def test_empty_file(self, tmp_path):
        with pytest.raises(ScenarioLoadError, match="Empty"):
            parse_scenario_file(write(tmp_path, ""))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ScenarioLoadError, match="Invalid YAML"):
            parse_scenario_file(write(tmp_path, "name: [unclosed"))

    def test_shipped_file_matches_builtins(self):
        scenarios = parse_scenario_file(REPO_ROOT / "scenarios" / "search_engines.yaml")
        assert scenarios == BUILTIN_SCENARIOS
