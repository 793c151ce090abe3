"""YAML scenario parser for browser scenarios.

Parses YAML scenario files into Scenario dataclass objects. A file holds
either a single scenario mapping or a ``scenarios`` list:

    scenarios:
      - name: Verify Google homepage title
        steps:
          - navigate: https://www.google.com
          - assert_title: Google
"""

from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import ScenarioLoadError
from .schema import STEP_TYPE_ALIASES, Scenario, Step, VALID_STEP_TYPES

# Short-form steps whose value is a plain string map it onto this field
_SCALAR_FIELDS = {
    "navigate": "url",
    "assert_title": "pattern",
}


def parse_scenario_file(file_path: Union[str, Path]) -> list[Scenario]:
    """Parse a YAML scenario file into Scenario objects.

    Args:
        file_path: Path to the YAML scenario file.

    Returns:
        Parsed scenarios, in file order.

    Raises:
        FileNotFoundError: If the scenario file doesn't exist.
        ScenarioLoadError: If the YAML is malformed or missing required fields.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise ScenarioLoadError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ScenarioLoadError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        raise ScenarioLoadError(f"Empty scenario file: {file_path}")

    return parse_scenarios_data(data, source=str(file_path))


def parse_scenarios_data(data: Any, source: str = "<inline>") -> list[Scenario]:
    """Parse one or many scenarios from already loaded YAML data."""
    if isinstance(data, dict) and "scenarios" in data:
        items = data["scenarios"]
        if not isinstance(items, list):
            raise ScenarioLoadError(f"'scenarios' must be a list in {source}")
        return [
            parse_scenario_data(item, source=f"{source}#scenarios[{i}]")
            for i, item in enumerate(items)
        ]

    return [parse_scenario_data(data, source=source)]


def parse_scenario_data(data: Any, source: str = "<inline>") -> Scenario:
    """Parse a scenario from a dictionary (already loaded YAML).

    Args:
        data: Dictionary with scenario data.
        source: Source identifier for error messages.

    Returns:
        Parsed Scenario object.

    Raises:
        ScenarioLoadError: If required fields are missing or malformed.
    """
    if not isinstance(data, dict):
        raise ScenarioLoadError(f"Scenario must be a YAML mapping, got {type(data).__name__}")

    _require_fields(data, ["name"], "scenario", source)

    steps_data = data.get("steps") or []
    if not isinstance(steps_data, list):
        raise ScenarioLoadError(f"'steps' must be a list in {source}")

    steps = [
        parse_step_data(step_data, context=f"steps[{i}]", source=source)
        for i, step_data in enumerate(steps_data)
    ]

    return Scenario(
        name=str(data["name"]),
        steps=tuple(steps),
        description=str(data.get("description") or ""),
    )


def parse_step_data(data: Any, context: str = "step", source: str = "<inline>") -> Step:
    """Parse a single step in long (``type: fill``) or short (``fill: {...}``) form."""
    if not isinstance(data, dict):
        raise ScenarioLoadError(f"{context} must be a mapping in {source}")

    if "type" in data:
        fields = dict(data)
    else:
        fields = _expand_short_form(data, context, source)

    if not isinstance(fields["type"], str):
        raise ScenarioLoadError(f"{context}.type must be a string in {source}")

    return Step(**{
        k: (str(v) if v is not None and k != "type" else v)
        for k, v in fields.items()
        if k in Step.__dataclass_fields__
    })


def _expand_short_form(data: dict, context: str, source: str) -> dict:
    """Turn ``{navigate: url}`` or ``{fill: {selector, text}}`` into long form."""
    known = VALID_STEP_TYPES | set(STEP_TYPE_ALIASES)
    kinds = [k for k in data if k in known]
    if len(kinds) != 1:
        raise ScenarioLoadError(
            f"{context} must name exactly one step type "
            f"({', '.join(sorted(VALID_STEP_TYPES))}) in {source}"
        )

    kind = kinds[0]
    value = data[kind]
    step_type = STEP_TYPE_ALIASES.get(kind, kind)
    fields: dict[str, Any] = {"type": step_type}

    if isinstance(value, dict):
        fields.update(value)
    elif step_type in _SCALAR_FIELDS:
        fields[_SCALAR_FIELDS[step_type]] = value
    else:
        raise ScenarioLoadError(
            f"{context}: '{kind}' step needs a mapping of parameters in {source}"
        )

    if "description" in data:
        fields["description"] = data["description"]
    return fields


def _require_fields(
    data: dict, fields: list[str], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    for field_name in fields:
        if field_name not in data:
            raise ScenarioLoadError(
                f"Missing required field '{field_name}' in {context} ({source})"
            )
