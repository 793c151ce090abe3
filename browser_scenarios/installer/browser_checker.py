"""Playwright browser checker for browser scenarios.

Finds and installs the browser binaries Playwright drives.
"""

import subprocess
import sys
from pathlib import Path
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from ..config import VALID_BROWSERS

INSTALL_TIMEOUT = 600


def find_browser(browser: str = "chromium") -> Optional[Path]:
    """Return the installed executable for *browser*, or None if missing."""
    if browser not in VALID_BROWSERS:
        raise ValueError(f"Unknown browser '{browser}'")

    try:
        with sync_playwright() as p:
            executable = getattr(p, browser).executable_path
    except PlaywrightError:
        return None

    path = Path(executable) if executable else None
    if path is None or not path.exists():
        return None
    return path


def install_browser(browser: str = "chromium", with_deps: bool = False) -> str:
    """Install a Playwright browser with ``python -m playwright install``.

    Returns:
        Installer output.

    Raises:
        RuntimeError: If the installer fails or times out.
    """
    if browser not in VALID_BROWSERS:
        raise ValueError(f"Unknown browser '{browser}'")

    cmd = [sys.executable, "-m", "playwright", "install"]
    if with_deps:
        cmd.append("--with-deps")
    cmd.append(browser)

    try:
        result = subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
            timeout=INSTALL_TIMEOUT,
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(
            f"Failed to install {browser}: {(e.stderr or e.stdout or '').strip()}"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(
            f"Installing {browser} did not finish within {INSTALL_TIMEOUT}s"
        ) from e

    return (result.stdout or "").strip()


def get_browser_info(browser: str = "chromium") -> dict:
    """Get installation status for a browser.

    Returns:
        Dictionary with browser name, executable path, and status.
    """
    executable = find_browser(browser)
    return {
        "browser": browser,
        "found": executable is not None,
        "executable": str(executable) if executable else None,
        "error": None if executable else (
            f"{browser} is not installed. Run: browser-scenarios install-browsers --browser {browser}"
        ),
    }
