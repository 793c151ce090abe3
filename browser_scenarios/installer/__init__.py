"""Installer module - Playwright browser management."""

from .browser_checker import find_browser, get_browser_info, install_browser

__all__ = ["find_browser", "get_browser_info", "install_browser"]
