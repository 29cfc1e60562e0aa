import typer
import logging
from typing import List, Optional
from typing_extensions import Annotated

from ..context import AppContext
from ..schemas import CheckReport

log = logging.getLogger(__name__)


def check_environment_logic(app_context: AppContext, compose_files: Optional[List[str]] = None, fix: bool = False) -> CheckReport:
    """Business logic for running environment checks."""
    log.info("Running environment checks...")

    if app_context.config.fell_back_to_defaults:
        log.info("Configuration file appears to be empty or corrupted. Using default settings.")
        if fix:
            app_context.config.save()
            log.info("Rewrote configuration file with default settings")

    report = app_context.docker_client.run_environment_checks(
        compose_files or app_context.config.app_config.compose_files
    )

    passed_count = sum(1 for check in report.checks if check.passed)
    total_count = len(report.checks)
    if passed_count == total_count:
        log.info(f"All environment checks passed ({passed_count}/{total_count})")
    else:
        log.warning(f"Environment check results: {passed_count} passed, {total_count - passed_count} failed")

    return report


def check(
    ctx: typer.Context,
    files: Annotated[
        Optional[List[str]],
        typer.Option("--file", "-f", help="Compose file(s) to look for."),
    ] = None,
    fix: Annotated[
        bool,
        typer.Option("--fix", help="Rewrite a corrupted configuration file with defaults."),
    ] = False,
):
    """Verifies that Docker is reachable and the compose files exist."""
    app_context: AppContext = ctx.obj
    report = check_environment_logic(app_context, compose_files=files, fix=fix)
    app_context.display.check_report(report)

    if not all(c.passed for c in report.checks):
        raise typer.Exit(code=1)
