"""Tests for running a list of scenarios with isolated sessions."""

import threading

import pytest

from browser_scenarios.config import ExecutionConfig
from browser_scenarios.runner.suite import SuiteRunner
from browser_scenarios.scenario import BUILTIN_SCENARIOS
from browser_scenarios.scenario.schema import Scenario, Step

from tests.mocks import FakeLauncher

SITES = {
    "https://www.google.com": ("Google", {}),
    "https://www.bing.com": ("Bing", {'input[name="q"]': 1}),
}

BROKEN = Scenario("Broken", (Step.navigate("https://www.google.com"), Step.assert_title("Yahoo")))


@pytest.fixture(autouse=True)
def reset_launchers():
    FakeLauncher.instances = []
    yield
    FakeLauncher.instances = []


def make_runner(**overrides):
    config = ExecutionConfig(assertion_timeout=0.05, poll_interval=0.01, **overrides)
    return SuiteRunner(
        config,
        launcher_factory=lambda cfg: FakeLauncher(cfg, sites=SITES),
        echo=lambda _: None,
    )


def test_runs_all_scenarios_in_order():
    suite = make_runner().run(BUILTIN_SCENARIOS)

    assert [r.name for r in suite.results] == [s.name for s in BUILTIN_SCENARIOS]
    assert suite.all_passed
    assert suite.passed_count == 2
    assert suite.failed_count == 0


def test_each_scenario_gets_a_fresh_session():
    make_runner().run(BUILTIN_SCENARIOS)

    [launcher] = FakeLauncher.instances
    assert len(launcher.pages) == 2
    assert launcher.pages[0] is not launcher.pages[1]
    assert launcher.open_sessions == 0


def test_launchers_are_closed():
    make_runner().run(BUILTIN_SCENARIOS)
    assert all(launcher.closed for launcher in FakeLauncher.instances)


def test_failure_does_not_affect_other_scenarios():
    suite = make_runner().run([BROKEN, *BUILTIN_SCENARIOS])

    assert [r.passed for r in suite.results] == [False, True, True]
    assert not suite.all_passed
    assert suite.failed_count == 1
    assert suite.total_count == 3


def test_parallel_workers_keep_order_and_isolation():
    scenarios = [BROKEN, *BUILTIN_SCENARIOS, BROKEN]
    threads: set[str] = set()

    class RecordingLauncher(FakeLauncher):
        def start(self):
            threads.add(threading.current_thread().name)
            super().start()

    runner = SuiteRunner(
        ExecutionConfig(assertion_timeout=0.05, poll_interval=0.01, workers=2),
        launcher_factory=lambda cfg: RecordingLauncher(cfg, sites=SITES),
        echo=lambda _: None,
    )
    suite = runner.run(scenarios)

    assert [r.passed for r in suite.results] == [False, True, True, False]
    assert all(t.startswith("scenario") for t in threads)
    assert all(launcher.closed for launcher in FakeLauncher.instances)
    assert sum(len(launcher.pages) for launcher in FakeLauncher.instances) == 4


def test_launcher_errors_propagate():
    class FailingLauncher(FakeLauncher):
        def start(self):
            raise RuntimeError("Executable doesn't exist")

    runner = SuiteRunner(
        ExecutionConfig(),
        launcher_factory=lambda cfg: FailingLauncher(cfg),
        echo=lambda _: None,
    )
    with pytest.raises(RuntimeError, match="Executable"):
        runner.run(BUILTIN_SCENARIOS)


def test_empty_suite():
    suite = make_runner().run([])
    assert suite.results == []
    assert suite.all_passed
