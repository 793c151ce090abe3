"""Pytest configuration and shared fixtures."""

import pytest

from browser_scenarios.config import ExecutionConfig

from tests.mocks import FakePage


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "browser: runs a real Playwright browser against local fixtures"
    )
    config.addinivalue_line(
        "markers", "live: hits public websites (set RUN_LIVE_TESTS=1)"
    )


@pytest.fixture
def search_page():
    """A page with a Google-like homepage and a Bing-like search form."""
    page = FakePage({
        "https://www.google.com": ("Google", {}),
        "https://www.bing.com": ("Bing", {'input[name="q"]': 1}),
    })
    page.on_submit = lambda query: f"{query} - Search"
    return page


@pytest.fixture
def fast_config():
    """Config with short timeouts so failing assertions return quickly."""
    return ExecutionConfig(
        assertion_timeout=0.05,
        poll_interval=0.01,
        action_timeout=0.05,
        navigation_timeout=0.05,
    )

