"""Scripted browser scenarios driven by Playwright."""

__version__ = "0.1.0"
