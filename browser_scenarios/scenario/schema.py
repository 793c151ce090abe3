"""Scenario data models for browser scenarios.

Defines immutable dataclasses for scenarios and their steps.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class StepType(str, Enum):
    """Supported browser step types."""
    NAVIGATE = "navigate"
    FILL = "fill"
    PRESS = "press"
    ASSERT_TITLE = "assert_title"


VALID_STEP_TYPES = {e.value for e in StepType}

# Alternate spellings accepted in scenario files
STEP_TYPE_ALIASES = {
    "goto": StepType.NAVIGATE.value,
    "press_key": StepType.PRESS.value,
    "title": StepType.ASSERT_TITLE.value,
}

# Fields each step type must carry
REQUIRED_STEP_FIELDS = {
    StepType.NAVIGATE.value: ("url",),
    StepType.FILL.value: ("selector", "text"),
    StepType.PRESS.value: ("selector", "key"),
    StepType.ASSERT_TITLE.value: ("pattern",),
}


@dataclass(frozen=True)
class Step:
    """A single browser action or assertion."""
    type: str
    url: Optional[str] = None
    selector: Optional[str] = None
    text: Optional[str] = None
    key: Optional[str] = None
    pattern: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        step_type = self.type.value if isinstance(self.type, StepType) else str(self.type)
        step_type = step_type.lower()
        object.__setattr__(self, "type", STEP_TYPE_ALIASES.get(step_type, step_type))

    @classmethod
    def navigate(cls, url: str, description: Optional[str] = None) -> "Step":
        return cls(type=StepType.NAVIGATE.value, url=url, description=description)

    @classmethod
    def fill(cls, selector: str, text: str, description: Optional[str] = None) -> "Step":
        return cls(type=StepType.FILL.value, selector=selector, text=text, description=description)

    @classmethod
    def press(cls, selector: str, key: str, description: Optional[str] = None) -> "Step":
        return cls(type=StepType.PRESS.value, selector=selector, key=key, description=description)

    @classmethod
    def assert_title(cls, pattern: str, description: Optional[str] = None) -> "Step":
        return cls(type=StepType.ASSERT_TITLE.value, pattern=pattern, description=description)

    @property
    def params(self) -> dict[str, str]:
        """Step parameters without the type and description."""
        return {
            k: v for k, v in self.__dict__.items()
            if v is not None and k not in ("type", "description")
        }

    def __str__(self) -> str:
        args = ", ".join(repr(v) for v in self.params.values())
        return f"{self.type}({args})"


@dataclass(frozen=True)
class Scenario:
    """A named, ordered sequence of browser steps."""
    name: str
    steps: tuple[Step, ...] = ()
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def total_steps(self) -> int:
        """Total number of steps."""
        return len(self.steps)

    def to_dict(self) -> dict[str, Any]:
        """Convert scenario to dictionary for serialization."""
        data: dict[str, Any] = {
            "name": self.name,
            "steps": [
                {k: v for k, v in step.__dict__.items() if v is not None}
                for step in self.steps
            ],
        }
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of scenario validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
