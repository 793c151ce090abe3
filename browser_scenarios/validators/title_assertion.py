"""Page title assertion.

Polls the page title until it matches a regular expression or the
assertion timeout passes.
"""

import re
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

from playwright.sync_api import Error as PlaywrightError


class TitledPage(Protocol):
    def title(self) -> str: ...


@dataclass
class TitleCheck:
    """Outcome of a title assertion."""
    passed: bool
    pattern: str
    observed: Optional[str]
    attempts: int
    elapsed: float

    @property
    def details(self) -> str:
        if self.passed:
            return f"title {self.observed!r} matches /{self.pattern}/"
        return (
            f"title {self.observed!r} did not match /{self.pattern}/ "
            f"after {self.elapsed:.1f}s ({self.attempts} checks)"
        )


class Deadline:
    """Tracks elapsed and remaining time against a fixed timeout."""

    def __init__(self, timeout: float, clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._start_time = clock()

    @property
    def elapsed(self) -> float:
        """Seconds elapsed since start."""
        return self._clock() - self._start_time

    @property
    def remaining(self) -> float:
        """Seconds remaining before timeout."""
        return max(0.0, self.timeout - self.elapsed)

    @property
    def is_expired(self) -> bool:
        return self.elapsed >= self.timeout


def wait_for_title(
    page: TitledPage,
    pattern: Union[str, re.Pattern],
    timeout: float = 5.0,
    poll_interval: float = 0.1,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> TitleCheck:
    """Poll ``page.title()`` until it matches *pattern* or *timeout* elapses.

    The title is always checked at least once, and once more after the
    deadline, so a title that settles during the last interval is seen.
    A Playwright error while reading the title (the page is navigating)
    counts as a failed check and polling goes on.

    Returns:
        TitleCheck with the last observed title.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    deadline = Deadline(timeout, clock=clock)
    attempts = 0
    observed: Optional[str] = None

    while True:
        attempts += 1
        try:
            title = page.title()
        except PlaywrightError:
            title = None
        else:
            observed = title

        if title is not None and regex.search(title):
            return TitleCheck(True, regex.pattern, observed, attempts, deadline.elapsed)

        if deadline.is_expired:
            return TitleCheck(False, regex.pattern, observed, attempts, deadline.elapsed)

        sleep(min(poll_interval, deadline.remaining) or poll_interval)
