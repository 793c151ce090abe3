"""Built-in scenarios against the real websites.

These depend on the network and on third-party pages, so they only run
when RUN_LIVE_TESTS=1.
"""

import os

import pytest

from browser_scenarios.config import ExecutionConfig
from browser_scenarios.runner.suite import SuiteRunner
from browser_scenarios.scenario.builtin import BING_SEARCH, GOOGLE_HOMEPAGE_TITLE

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(os.environ.get("RUN_LIVE_TESTS") != "1", reason="set RUN_LIVE_TESTS=1"),
]


@pytest.mark.parametrize("scenario", [GOOGLE_HOMEPAGE_TITLE, BING_SEARCH], ids=lambda s: s.name)
def test_builtin_scenario(scenario):
    suite = SuiteRunner(ExecutionConfig(), echo=lambda _: None).run([scenario])
    [result] = suite.results
    assert result.passed, result.error
