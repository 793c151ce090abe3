"""Setup configuration for browser-scenarios tool."""

from setuptools import setup, find_packages

setup(
    name="browser-scenarios",
    version="0.1.0",
    description="Run scripted browser scenarios with Playwright",
    packages=find_packages(include=["browser_scenarios", "browser_scenarios.*"]),
    python_requires=">=3.11",
    install_requires=[
        "playwright>=1.40.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "browser-scenarios=browser_scenarios.cli:main",
        ],
    },
)
