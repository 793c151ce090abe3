"""Browser session management on top of Playwright's sync API.

One launcher owns one Playwright driver and one browser process. Each
scenario gets its own browser context and page from ``new_session()``,
which are closed when the scenario ends.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from ..config import ExecutionConfig


class BrowserLauncher:
    """Launches a browser and hands out isolated page sessions.

    Playwright's sync API is bound to the thread that started it, so a
    launcher must be created and used on a single thread.
    """

    def __init__(self, config: Optional[ExecutionConfig] = None):
        self.config = config or ExecutionConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    def start(self) -> None:
        """Start the Playwright driver and launch the configured browser."""
        if self.is_running:
            return

        self._playwright = sync_playwright().start()
        try:
            browser_type = getattr(self._playwright, self.config.browser)
            self._browser = browser_type.launch(headless=self.config.headless)
        except Exception:
            self.close()
            raise

    @contextmanager
    def new_session(self) -> Iterator[Page]:
        """Yield a page in a fresh browser context, closing it afterwards."""
        if not self.is_running:
            self.start()

        context = self._browser.new_context()
        try:
            context.set_default_timeout(self.config.action_timeout * 1000)
            context.set_default_navigation_timeout(self.config.navigation_timeout * 1000)
            page = context.new_page()
            yield page
        finally:
            context.close()

    def close(self) -> None:
        """Close the browser and stop the Playwright driver."""
        try:
            if self._browser is not None:
                self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                self._playwright.stop()
            self._playwright = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.close()
