"""Scenario validator for browser scenarios.

Validates parsed Scenario objects before any browser is launched.
"""

import re
from urllib.parse import urlparse

from .schema import (
    REQUIRED_STEP_FIELDS,
    Scenario,
    Step,
    ValidationError,
    ValidationResult,
    VALID_STEP_TYPES,
)

# Schemes that form an absolute, loadable URL without a host
_HOSTLESS_SCHEMES = {"file", "about", "data"}


def validate_scenario(scenario: Scenario) -> ValidationResult:
    """Validate a parsed Scenario object.

    Checks:
    - Scenario name
    - Step types and required fields per type
    - Navigation URLs are absolute
    - Title patterns are valid regular expressions

    Args:
        scenario: Parsed Scenario to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    if not scenario.name or not scenario.name.strip():
        errors.append(ValidationError(
            path="name",
            message="Scenario 'name' is required and must not be empty.",
        ))

    for i, step in enumerate(scenario.steps):
        _validate_step(step, f"steps[{i}]", errors)

    if not scenario.steps:
        warnings.append(ValidationError(
            path="steps",
            message="No steps defined.",
            severity="warning",
        ))
    elif not any(step.type == "assert_title" for step in scenario.steps):
        warnings.append(ValidationError(
            path="steps",
            message="No assertions defined. Scenario will pass without validation.",
            severity="warning",
        ))
    elif scenario.steps[0].type != "navigate":
        warnings.append(ValidationError(
            path="steps[0]",
            message="First step is not 'navigate'; the scenario starts on about:blank.",
            severity="warning",
        ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def validate_scenarios(scenarios: list[Scenario]) -> ValidationResult:
    """Validate several scenarios, prefixing paths with the scenario name."""
    result = ValidationResult(valid=True)
    seen: set[str] = set()

    for scenario in scenarios:
        single = validate_scenario(scenario)
        prefix = scenario.name or "<unnamed>"
        for e in single.errors:
            result.errors.append(ValidationError(f"{prefix}.{e.path}", e.message))
        for w in single.warnings:
            result.warnings.append(ValidationError(f"{prefix}.{w.path}", w.message, "warning"))

        if scenario.name in seen:
            result.errors.append(ValidationError(
                path=prefix,
                message=f"Duplicate scenario name '{scenario.name}'.",
            ))
        seen.add(scenario.name)

    result.valid = not result.errors
    return result


def _validate_step(step: Step, path: str, errors: list[ValidationError]) -> None:
    """Validate one step."""
    if step.type not in VALID_STEP_TYPES:
        errors.append(ValidationError(
            path=f"{path}.type",
            message=f"Invalid step type '{step.type}'. Must be one of: {', '.join(sorted(VALID_STEP_TYPES))}",
        ))
        return

    missing = False
    for field_name in REQUIRED_STEP_FIELDS[step.type]:
        value = getattr(step, field_name)
        # fill may legitimately clear a field with an empty string
        if value is None or (value == "" and field_name != "text"):
            errors.append(ValidationError(
                path=f"{path}.{field_name}",
                message=f"'{step.type}' step requires '{field_name}'.",
            ))
            missing = True
    if missing:
        return

    if step.type == "navigate" and not is_absolute_url(step.url):
        errors.append(ValidationError(
            path=f"{path}.url",
            message=f"URL '{step.url}' is not absolute (expected e.g. 'https://example.com').",
        ))

    elif step.type == "assert_title":
        try:
            re.compile(step.pattern)
        except re.error as e:
            errors.append(ValidationError(
                path=f"{path}.pattern",
                message=f"Invalid regular expression '{step.pattern}': {e}",
            ))


def is_absolute_url(url: str) -> bool:
    """Whether *url* is a well-formed absolute URL."""
    parsed = urlparse(url)
    if not parsed.scheme:
        return False
    if parsed.scheme in _HOSTLESS_SCHEMES:
        return True
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
