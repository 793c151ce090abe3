"""Scenario executor - runs one scenario against a browser session.

Runs the scenario's steps strictly in order:
1. navigate  - load a URL and wait for the load event
2. fill      - locate one element and set its value
3. press     - locate one element and dispatch a key press
4. assert_title - poll the page title until it matches

The first failing step aborts the scenario; later steps are reported
as skipped.
"""

import re
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import click
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config import ExecutionConfig
from ..errors import (
    AmbiguousSelectorError,
    ElementNotFoundError,
    NavigationError,
    StepError,
    TitleAssertionError,
)
from ..scenario.schema import Scenario, Step, StepType
from ..validators.title_assertion import wait_for_title
from .result_collector import ResultCollector

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"

STRICT_VIOLATION = re.compile(r"strict mode violation.*?resolved to (\d+) elements", re.DOTALL)


@dataclass
class StepResult:
    """Outcome of a single step."""
    index: int
    step: Step
    status: str
    duration_ms: int = 0
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == PASSED


@dataclass
class ScenarioResult:
    """Complete result of one scenario run."""
    name: str
    passed: bool = False
    steps: list[StepResult] = field(default_factory=list)
    duration_ms: int = 0
    error: Optional[str] = None
    failure: Optional[dict] = None
    logs: list[dict] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)

    @property
    def failed_step(self) -> Optional[StepResult]:
        for step_result in self.steps:
            if step_result.status == FAILED:
                return step_result
        return None


def _echo(message: str) -> None:
    click.echo(message, err=True)


class ScenarioExecutor:
    """Executes scenarios step by step against a borrowed page.

    The executor never opens or closes the page; the caller owns it.
    """

    def __init__(
        self,
        config: Optional[ExecutionConfig] = None,
        echo: Optional[Callable[[str], None]] = None,
    ):
        """Initialize scenario executor.

        Args:
            config: Execution configuration (timeouts, strictness).
            echo: Progress output callback. Defaults to stderr.
        """
        self.config = config or ExecutionConfig()
        self.echo = echo or _echo

    def execute(self, page: Page, scenario: Scenario) -> ScenarioResult:
        """Run every step of *scenario* on *page*, in declaration order.

        Returns:
            ScenarioResult; step failures are recorded, not raised.
        """
        start_time = time.time()
        result = ScenarioResult(name=scenario.name)
        collector = ResultCollector(scenario.name, self.config.screenshot_dir)
        aborted = False

        self.echo(f"Running: {scenario.name}")

        for index, step in enumerate(scenario.steps):
            if aborted:
                result.steps.append(StepResult(index, step, SKIPPED))
                continue

            step_start = time.time()
            try:
                self.run_step(page, step, index)

            except StepError as e:
                result.error = str(e)
                result.failure = e.to_dict()

            except PlaywrightError as e:
                error = StepError(_first_line(e), step, index)
                result.error = str(error)
                result.failure = error.to_dict()

            except Exception as e:
                result.error = f"Unexpected error in steps[{index}] {step}: {type(e).__name__}: {e}"
                result.failure = {
                    "error": type(e).__name__,
                    "message": str(e),
                    "step_index": index,
                    "step": step.type,
                    "params": step.params,
                    "expected": step.pattern,
                    "observed": None,
                }

            duration_ms = int((time.time() - step_start) * 1000)
            if result.error is None:
                result.steps.append(StepResult(index, step, PASSED, duration_ms))
                collector.info(f"steps[{index}] {step} passed in {duration_ms} ms")
                self.echo(f"  [PASS] {step} ({duration_ms} ms)")
            else:
                aborted = True
                result.steps.append(StepResult(index, step, FAILED, duration_ms, result.error))
                collector.error(result.error)
                self.echo(f"  [FAIL] {step}: {result.error}")
                collector.capture_screenshot(page)

        result.passed = not aborted
        result.duration_ms = int((time.time() - start_time) * 1000)
        result.logs = collector.result.logs
        result.screenshots = collector.result.screenshots
        for error in collector.result.errors:
            self.echo(f"Warning: {error}")

        return result

    def run_step(self, page: Page, step: Step, index: int = 0) -> None:
        """Run one step, blocking until its effect is complete.

        Raises:
            StepError: A subclass describing why the step failed.
        """
        if step.type == StepType.NAVIGATE.value:
            self._navigate(page, step, index)
        elif step.type == StepType.FILL.value:
            locator = self._locate(page, step, index)
            self._act(lambda: locator.fill(step.text, timeout=self._ms(self.config.action_timeout)), step, index)
        elif step.type == StepType.PRESS.value:
            locator = self._locate(page, step, index)
            self._act(lambda: locator.press(step.key, timeout=self._ms(self.config.action_timeout)), step, index)
        elif step.type == StepType.ASSERT_TITLE.value:
            self._assert_title(page, step, index)
        else:
            raise StepError(f"Unsupported step type: {step.type}", step, index)

    def _navigate(self, page: Page, step: Step, index: int) -> None:
        timeout = self.config.navigation_timeout
        try:
            page.goto(step.url, timeout=self._ms(timeout))
        except PlaywrightTimeoutError as e:
            raise NavigationError(
                f"Navigation to {step.url} did not complete within {timeout:g}s",
                step, index, observed=_current_url(page),
            ) from e
        except PlaywrightError as e:
            raise NavigationError(
                f"Navigation to {step.url} failed: {_first_line(e)}",
                step, index, observed=_current_url(page),
            ) from e

    def _locate(self, page: Page, step: Step, index: int):
        """Resolve the step's selector to exactly one element."""
        timeout = self.config.action_timeout
        locator = page.locator(step.selector)
        try:
            locator.first.wait_for(state="attached", timeout=self._ms(timeout))
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(
                f"No element matches '{step.selector}' within {timeout:g}s",
                step, index, observed="0 matches",
            ) from e
        except PlaywrightError as e:
            raise ElementNotFoundError(
                f"Cannot locate '{step.selector}': {_first_line(e)}",
                step, index,
            ) from e

        count = locator.count()
        if count > 1:
            if self.config.strict_selectors:
                raise AmbiguousSelectorError(
                    f"Selector '{step.selector}' matches {count} elements",
                    step, index, observed=f"{count} matches",
                )
            return locator.first
        return locator

    def _act(self, action: Callable[[], None], step: Step, index: int) -> None:
        try:
            action()
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(
                f"Element '{step.selector}' was not actionable within {self.config.action_timeout:g}s",
                step, index,
            ) from e
        except PlaywrightError as e:
            violation = STRICT_VIOLATION.search(str(e))
            if violation:
                count = violation.group(1)
                raise AmbiguousSelectorError(
                    f"Selector '{step.selector}' matches {count} elements",
                    step, index, observed=f"{count} matches",
                ) from e
            raise StepError(_first_line(e), step, index) from e

    def _assert_title(self, page: Page, step: Step, index: int) -> None:
        check = wait_for_title(
            page,
            step.pattern,
            timeout=self.config.assertion_timeout,
            poll_interval=self.config.poll_interval,
        )
        if not check.passed:
            raise TitleAssertionError(
                f"Expected title to match /{step.pattern}/ within {self.config.assertion_timeout:g}s",
                step, index, observed=check.observed,
            )

    @staticmethod
    def _ms(seconds: float) -> float:
        return seconds * 1000


def _current_url(page: Page) -> Optional[str]:
    try:
        return page.url
    except PlaywrightError:
        return None


def _first_line(error: Exception) -> str:
    message = getattr(error, "message", None) or str(error)
    return message.strip().splitlines()[0] if message.strip() else type(error).__name__
