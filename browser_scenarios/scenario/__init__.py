"""Scenario module - scenario models, YAML parsing and validation."""

from .schema import (
    Scenario,
    Step,
    StepType,
    ValidationError,
    ValidationResult,
)
from .parser import parse_scenario_data, parse_scenario_file, parse_scenarios_data
from .validator import validate_scenario, validate_scenarios
from .builtin import BUILTIN_SCENARIOS

__all__ = [
    "BUILTIN_SCENARIOS",
    "Scenario",
    "Step",
    "StepType",
    "ValidationError",
    "ValidationResult",
    "parse_scenario_data",
    "parse_scenario_file",
    "parse_scenarios_data",
    "validate_scenario",
    "validate_scenarios",
]
