"""Session module - isolated browser sessions."""

from .launcher import BrowserLauncher

__all__ = ["BrowserLauncher"]
