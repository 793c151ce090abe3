"""CLI entry point for browser scenarios.

    browser-scenarios run [scenario.yaml ...] [options]
    python -m browser_scenarios run

Progress goes to stderr; the JSON summary document goes to stdout.
"""

import json
import sys
import time
from pathlib import Path
from typing import Optional

import click

from .config import VALID_BROWSERS, ExecutionConfig, load_config
from .errors import ConfigError, ScenarioLoadError
from .scenario import BUILTIN_SCENARIOS, Scenario, parse_scenario_file, validate_scenarios

REPORT_FILE_NAME = "scenario_report.json"


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML file with execution settings.",
)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path]):
    """Run scripted browser scenarios with Playwright."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.argument("files", nargs=-1, type=click.Path(path_type=Path, dir_okay=False))
@click.option("--only", "only", multiple=True, help="Run only scenarios with this name (repeatable).")
@click.option("--browser", type=click.Choice(sorted(VALID_BROWSERS)), default=None, help="Browser engine.")
@click.option("--headed", is_flag=True, default=False, help="Show the browser window.")
@click.option("--workers", type=int, default=None, help="Scenarios to run in parallel.")
@click.option("--timeout", "navigation_timeout", type=float, default=None, help="Navigation timeout (sec).")
@click.option("--action-timeout", type=float, default=None, help="Element lookup/action timeout (sec).")
@click.option("--assertion-timeout", type=float, default=None, help="Title assertion timeout (sec).")
@click.option("--no-strict", is_flag=True, default=False, help="Use the first match when a selector matches several elements.")
@click.option("--save-report", is_flag=True, default=False, help="Save the JSON report to a file.")
@click.option("--report-dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Directory for saved reports.")
@click.option("--screenshot-dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Save failure screenshots here.")
@click.option("--pretty", is_flag=True, default=False, help="Pretty print the JSON output.")
@click.pass_context
def run(ctx: click.Context, files, only, browser, headed, workers, navigation_timeout,
        action_timeout, assertion_timeout, no_strict, save_report, report_dir,
        screenshot_dir, pretty):
    """Run scenario files, or the built-in scenarios when none are given."""
    from .reporting.json_reporter import JsonReporter
    from .runner.suite import SuiteRunner

    try:
        config = load_config(ctx.obj.get("config_path")).replace(
            browser=browser,
            headless=False if headed else None,
            workers=workers,
            navigation_timeout=navigation_timeout,
            action_timeout=action_timeout,
            assertion_timeout=assertion_timeout,
            strict_selectors=False if no_strict else None,
            save_report=True if save_report else None,
            report_dir=report_dir,
            screenshot_dir=screenshot_dir,
        )
    except (ConfigError, FileNotFoundError) as e:
        output_error(f"Invalid configuration: {e}")
        sys.exit(1)

    scenarios = _load_or_exit(files)
    if only:
        selected = [s for s in scenarios if s.name in only]
        missing = sorted(set(only) - {s.name for s in selected})
        if missing:
            output_error(f"No scenario named: {', '.join(missing)}")
            sys.exit(1)
        scenarios = selected

    _validate_or_exit(scenarios)

    start_time = time.time()
    try:
        suite = SuiteRunner(config).run(scenarios)

    except KeyboardInterrupt:
        duration_ms = int((time.time() - start_time) * 1000)
        output_error("Run interrupted by user", duration_ms=duration_ms)
        sys.exit(130)

    except Exception as e:
        duration_ms = int((time.time() - start_time) * 1000)
        output_error(f"Run failed: {type(e).__name__}: {e}", duration_ms=duration_ms)
        sys.exit(1)

    reporter = JsonReporter()
    report = reporter.generate(suite, browser=config.browser)

    report_path = None
    if config.save_report:
        target = (config.report_dir or Path(".")) / REPORT_FILE_NAME
        try:
            report_path = str(reporter.save(report, target))
            click.echo(f"Report saved: {report_path}", err=True)
        except OSError as e:
            click.echo(f"Warning: Failed to save report: {e}", err=True)

    _print_summary(suite)

    output = reporter.generate_summary_output(report, report_path)
    click.echo(reporter.to_json_string(output, pretty=pretty))

    if not output["success"]:
        sys.exit(1)


@main.command(name="list")
@click.argument("files", nargs=-1, type=click.Path(path_type=Path, dir_okay=False))
def list_scenarios(files):
    """List scenario names and step counts."""
    for scenario in _load_or_exit(files):
        click.echo(f"{scenario.name} ({scenario.total_steps} steps)")


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path, dir_okay=False))
def validate(files):
    """Parse and validate scenario files without running them."""
    scenarios = _load_or_exit(files)
    result = _validate_or_exit(scenarios)
    click.echo(f"{len(scenarios)} scenarios: {result}")


@main.command(name="install-browsers")
@click.option("--browser", type=click.Choice(sorted(VALID_BROWSERS)), default=ExecutionConfig.browser)
@click.option("--with-deps", is_flag=True, default=False, help="Also install system dependencies.")
def install_browsers(browser, with_deps):
    """Install the Playwright browser used to run scenarios."""
    from .installer.browser_checker import get_browser_info, install_browser

    info = get_browser_info(browser)
    if info["found"] and not with_deps:
        click.echo(f"✓ {browser} already installed: {info['executable']}")
        return

    click.echo(f"Installing {browser}...")
    try:
        install_browser(browser, with_deps=with_deps)
    except RuntimeError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ {browser} installed")


def _load_or_exit(files) -> list[Scenario]:
    """Load scenarios from files, or return the built-ins."""
    if not files:
        return list(BUILTIN_SCENARIOS)

    scenarios: list[Scenario] = []
    for path in files:
        try:
            scenarios.extend(parse_scenario_file(path))
        except (FileNotFoundError, ScenarioLoadError) as e:
            output_error(f"Failed to parse scenario: {e}")
            sys.exit(1)
    return scenarios


def _validate_or_exit(scenarios: list[Scenario]):
    validation = validate_scenarios(scenarios)
    for w in validation.warnings:
        click.echo(f"Warning: {w.path}: {w.message}", err=True)

    if not validation.valid:
        errors_str = "; ".join(f"{e.path}: {e.message}" for e in validation.errors)
        output_error(f"Invalid scenario: {errors_str}")
        sys.exit(1)
    return validation


def _print_summary(suite) -> None:
    click.echo(f"\nResults: {suite.passed_count}/{suite.total_count} passed", err=True)
    for r in suite.results:
        status = "PASS" if r.passed else "FAIL"
        line = f"  [{status}] {r.name} ({r.duration_ms} ms)"
        if r.failure:
            line += f"\n         {r.failure['step']} failed: {r.failure['message']}"
            if r.failure.get("expected") is not None:
                line += f"\n         expected: /{r.failure['expected']}/"
            if r.failure.get("observed") is not None:
                line += f"\n         observed: {r.failure['observed']!r}"
        click.echo(line, err=True)


def output_error(message: str, **extra):
    """Output error as a JSON summary document for the running command."""
    ctx = click.get_current_context(silent=True)
    output = {
        "success": False,
        "command": ctx.info_name if ctx is not None else "run",
        "data": extra or None,
        "message": message,
    }
    click.echo(json.dumps(output, ensure_ascii=False))


if __name__ == "__main__":
    main()
