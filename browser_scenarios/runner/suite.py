"""Suite runner - runs many scenarios, each in its own browser session."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..config import ExecutionConfig
from ..scenario.schema import Scenario
from ..session.launcher import BrowserLauncher
from .executor import ScenarioExecutor, ScenarioResult

LauncherFactory = Callable[[ExecutionConfig], BrowserLauncher]


@dataclass
class SuiteResult:
    """Results of a suite run, in scenario order."""
    results: list[ScenarioResult] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def total_count(self) -> int:
        return len(self.results)


class SuiteRunner:
    """Runs a list of scenarios with one isolated session per scenario.

    With ``workers > 1`` scenarios run on a thread pool. Every worker
    thread starts its own launcher, since Playwright's sync API cannot
    be shared across threads. Nothing else is shared between scenarios.
    """

    def __init__(
        self,
        config: Optional[ExecutionConfig] = None,
        launcher_factory: Optional[LauncherFactory] = None,
        echo: Optional[Callable[[str], None]] = None,
    ):
        self.config = config or ExecutionConfig()
        self.launcher_factory = launcher_factory or BrowserLauncher
        self.executor = ScenarioExecutor(self.config, echo=echo)
        self._local = threading.local()
        self._launchers: list[BrowserLauncher] = []
        self._lock = threading.Lock()

    def run(self, scenarios: list[Scenario]) -> SuiteResult:
        """Run all scenarios and return their results in input order."""
        start_time = time.time()
        suite = SuiteResult()

        try:
            if self.config.workers > 1 and len(scenarios) > 1:
                with ThreadPoolExecutor(
                    max_workers=self.config.workers,
                    thread_name_prefix="scenario",
                ) as pool:
                    # Launchers must be closed on the thread that started them
                    suite.results = list(pool.map(self._run_and_release, scenarios))
            else:
                suite.results = [self.run_scenario(s) for s in scenarios]
        finally:
            self._close_launchers()
            suite.duration_ms = int((time.time() - start_time) * 1000)

        return suite

    def run_scenario(self, scenario: Scenario) -> ScenarioResult:
        """Run one scenario in a fresh session from this thread's launcher."""
        launcher = self._launcher()
        with launcher.new_session() as page:
            return self.executor.execute(page, scenario)

    def _run_and_release(self, scenario: Scenario) -> ScenarioResult:
        try:
            return self.run_scenario(scenario)
        finally:
            launcher = getattr(self._local, "launcher", None)
            if launcher is not None:
                launcher.close()
                self._local.launcher = None
                with self._lock:
                    self._launchers.remove(launcher)

    def _launcher(self) -> BrowserLauncher:
        launcher = getattr(self._local, "launcher", None)
        if launcher is None:
            launcher = self.launcher_factory(self.config)
            launcher.start()
            self._local.launcher = launcher
            with self._lock:
                self._launchers.append(launcher)
        return launcher

    def _close_launchers(self) -> None:
        with self._lock:
            launchers, self._launchers = self._launchers, []
        for launcher in launchers:
            launcher.close()
        self._local.launcher = None
