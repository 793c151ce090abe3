"""Result collector for scenario execution.

Collects step log entries and failure screenshots for one scenario.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


@dataclass
class CollectedResult:
    """Aggregated logs, screenshots and collection errors for a scenario."""
    logs: list[dict] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add_log(self, level: str, message: str) -> None:
        """Add a log entry."""
        self.logs.append({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "message": message,
        })

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)


class ResultCollector:
    """Collects results for one scenario and manages screenshot saving."""

    def __init__(self, scenario_name: str, output_dir: Optional[Path] = None):
        """Initialize result collector.

        Args:
            scenario_name: Used to name saved screenshots.
            output_dir: Directory to save screenshots. None = don't save.
        """
        self.scenario_name = scenario_name
        self.output_dir = Path(output_dir) if output_dir else None
        self.result = CollectedResult()

    def info(self, message: str) -> None:
        self.result.add_log("info", message)

    def error(self, message: str) -> None:
        self.result.add_log("error", message)

    def capture_screenshot(self, page, label: str = "failure") -> Optional[str]:
        """Save a full-page screenshot of *page*, if an output dir is configured.

        Returns:
            Path of the saved file, or None when disabled or capture failed.
        """
        if self.output_dir is None:
            return None

        file_path = self.output_dir / f"{slugify(self.scenario_name)}-{label}.png"
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            page.screenshot(path=str(file_path), full_page=True)
        except Exception as e:
            self.result.add_error(f"Failed to save screenshot '{file_path.name}': {e}")
            return None

        self.result.screenshots.append(str(file_path))
        return str(file_path)


def slugify(name: str) -> str:
    """Turn a scenario name into a file-name friendly slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "scenario"
