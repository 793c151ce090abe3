"""Exceptions raised while loading and running browser scenarios."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .scenario.schema import Step


class ScenarioError(Exception):
    """Base class for scenario failures."""


class ScenarioLoadError(ScenarioError, ValueError):
    """Scenario input is malformed or cannot be read."""


class ConfigError(ScenarioError, ValueError):
    """Execution configuration is invalid."""


class StepError(ScenarioError):
    """A step failed while running against a browser session.

    Carries the failing step, its position in the scenario and the last
    state observed from the page.
    """

    def __init__(
        self,
        message: str,
        step: "Step",
        index: int,
        observed: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.step = step
        self.index = index
        self.observed = observed

    @property
    def expected(self) -> Optional[str]:
        """The value the step expected, where the step type has one."""
        return self.step.pattern

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "step_index": self.index,
            "step": self.step.type,
            "params": self.step.params,
            "expected": self.expected,
            "observed": self.observed,
        }

    def __str__(self) -> str:
        msg = f"steps[{self.index}] {self.step}: {self.message}"
        if self.observed is not None:
            msg += f" (observed: {self.observed!r})"
        return msg


class NavigationError(StepError):
    """The page did not finish loading within the navigation timeout."""


class ElementNotFoundError(StepError):
    """No element matched the selector within the action timeout."""


class AmbiguousSelectorError(StepError):
    """More than one element matched while strict selectors are enforced."""


class TitleAssertionError(StepError, AssertionError):
    """The page title never matched the expected pattern."""
