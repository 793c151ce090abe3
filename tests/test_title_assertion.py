"""Tests for page title polling."""

import re

from playwright.sync_api import Error as PlaywrightError

from browser_scenarios.validators.title_assertion import Deadline, wait_for_title


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TitleSequence:
    """Returns the given titles in turn, then repeats the last one.

    Exception entries are raised instead of returned.
    """

    def __init__(self, *titles):
        self.titles = list(titles)
        self.calls = 0

    def title(self) -> str:
        self.calls += 1
        title = self.titles.pop(0) if len(self.titles) > 1 else self.titles[0]
        if isinstance(title, Exception):
            raise title
        return title


def test_matches_immediately():
    clock = FakeClock()
    check = wait_for_title(TitleSequence("Google"), "Google", clock=clock, sleep=clock.sleep)
    assert check.passed
    assert check.attempts == 1
    assert clock.sleeps == []


def test_waits_until_title_changes():
    clock = FakeClock()
    page = TitleSequence("Bing", "Bing", "Playwright testing - Search")

    check = wait_for_title(page, "Playwright", timeout=5, poll_interval=0.5, clock=clock, sleep=clock.sleep)

    assert check.passed
    assert check.observed == "Playwright testing - Search"
    assert check.attempts == 3
    assert clock.sleeps == [0.5, 0.5]


def test_times_out_with_last_observed_title():
    clock = FakeClock()
    check = wait_for_title(TitleSequence("Bing"), "Playwright", timeout=1, poll_interval=0.3,
                           clock=clock, sleep=clock.sleep)

    assert not check.passed
    assert check.observed == "Bing"
    assert clock.now >= 1
    # last sleep is clipped to the remaining time
    assert clock.sleeps[-1] < 0.3
    assert "did not match /Playwright/" in check.details


def test_pattern_is_searched_not_fully_matched():
    clock = FakeClock()
    check = wait_for_title(TitleSequence("Welcome to Google Search"), re.compile("Google"),
                           clock=clock, sleep=clock.sleep)
    assert check.passed


def test_zero_timeout_checks_once():
    clock = FakeClock()
    page = TitleSequence("Bing")
    check = wait_for_title(page, "Google", timeout=0, clock=clock, sleep=clock.sleep)
    assert not check.passed
    assert page.calls == 1


def test_deadline():
    clock = FakeClock()
    deadline = Deadline(2.0, clock=clock)
    clock.now = 1.5
    assert deadline.elapsed == 1.5
    assert deadline.remaining == 0.5
    assert not deadline.is_expired
    clock.now = 3
    assert deadline.remaining == 0.0
    assert deadline.is_expired


NAVIGATING = PlaywrightError("Execution context was destroyed, most likely because of a navigation")


def test_keeps_polling_through_navigation_errors():
    clock = FakeClock()
    page = TitleSequence(NAVIGATING, "Playwright testing - Search")

    check = wait_for_title(page, "Playwright", timeout=5, poll_interval=0.5, clock=clock, sleep=clock.sleep)

    assert check.passed
    assert check.observed == "Playwright testing - Search"
    assert check.attempts == 2


def test_timeout_reports_last_title_read_before_errors():
    clock = FakeClock()
    page = TitleSequence("Bing", NAVIGATING)

    check = wait_for_title(page, "Playwright", timeout=1, poll_interval=0.3, clock=clock, sleep=clock.sleep)

    assert not check.passed
    assert check.observed == "Bing"


def test_title_never_readable():
    clock = FakeClock()
    check = wait_for_title(TitleSequence(NAVIGATING), "Google", timeout=0.5, poll_interval=0.2,
                           clock=clock, sleep=clock.sleep)
    assert not check.passed
    assert check.observed is None
    assert check.attempts > 1
