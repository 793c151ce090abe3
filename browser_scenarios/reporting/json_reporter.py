"""JSON report generator for scenario runs.

Generates structured JSON reports from suite results.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..runner.executor import ScenarioResult
from ..runner.suite import SuiteResult


class JsonReporter:
    """Generates JSON reports from scenario results."""

    def generate(
        self,
        suite: SuiteResult,
        browser: str = "chromium",
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from suite results.

        Args:
            suite: Results of the scenario run.
            browser: Browser the scenarios ran in.
            error: Overall error message if the run itself failed.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        all_passed = suite.all_passed and error is None

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "browser": browser,
            "status": "passed" if all_passed else "failed",
            "summary": {
                "total": suite.total_count,
                "passed": suite.passed_count,
                "failed": suite.failed_count,
                "duration_ms": suite.duration_ms,
            },
            "scenarios": [self._scenario_entry(r) for r in suite.results],
            "error": error,
        }

    def _scenario_entry(self, result: ScenarioResult) -> dict[str, Any]:
        return {
            "name": result.name,
            "status": "passed" if result.passed else "failed",
            "duration_ms": result.duration_ms,
            "steps": [
                {
                    "index": s.index,
                    "type": s.step.type,
                    "params": s.step.params,
                    "status": s.status,
                    "duration_ms": s.duration_ms,
                    "error": s.error,
                }
                for s in result.steps
            ],
            "failure": result.failure,
            "logs": result.logs,
            "screenshots": result.screenshots,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_summary_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate the CLI summary document.

        {
            "success": bool,
            "command": "run",
            "data": { ... },
            "message": str
        }

        Args:
            report: Run report dictionary.
            report_path: Path where report was saved.

        Returns:
            Summary document for stdout.
        """
        summary = report["summary"]
        all_passed = report["status"] == "passed"

        data: dict[str, Any] = {
            "total": summary["total"],
            "passed": summary["passed"],
            "failed": summary["failed"],
            "duration_ms": summary["duration_ms"],
            "failures": [
                {"scenario": s["name"], **s["failure"]}
                for s in report["scenarios"]
                if s["status"] == "failed" and s["failure"]
            ],
        }

        if report_path:
            data["report_path"] = report_path

        if report.get("error"):
            message = f"Run failed: {report['error']}"
        elif not all_passed:
            message = f"{summary['failed']} of {summary['total']} scenarios failed"
        else:
            message = "All scenarios passed"

        return {
            "success": all_passed,
            "command": "run",
            "data": data,
            "message": message,
        }
