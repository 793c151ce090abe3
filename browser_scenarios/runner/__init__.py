"""Runner module - scenario orchestration."""

from .executor import ScenarioExecutor, ScenarioResult, StepResult
from .result_collector import CollectedResult, ResultCollector
from .suite import SuiteResult, SuiteRunner

__all__ = [
    "ScenarioExecutor",
    "ScenarioResult",
    "StepResult",
    "CollectedResult",
    "ResultCollector",
    "SuiteResult",
    "SuiteRunner",
]
