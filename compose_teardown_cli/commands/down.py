"""
Down command implementation for the compose-teardown CLI.

Removes every container of the project (services in reverse dependency
order), then the project's networks, then with --volumes its named volumes.
External networks and volumes are never touched, and resources that are
already gone are skipped, so running `down` twice is safe.

## Error Handling

- A resource that cannot be removed is logged as a warning and reported in
  the result table; the command still exits 0. Running `down` again is the
  expected remedy.
- Failing to resolve the project, list a service's containers, or check
  whether a network/volume exists aborts the command with exit code 1.
- Ctrl+C stops the teardown before the next Docker call.
"""

import signal
import threading
import typer
import logging
from pathlib import Path
from typing import List, Optional
from typing_extensions import Annotated

from ..context import AppContext
from ..errors import ProjectLoadError, TeardownCancelled, TeardownError
from ..project import load_project_file
from ..schemas import Project, TeardownReport

log = logging.getLogger(__name__)


def resolve_project(
    app_context: AppContext,
    project_file: Optional[Path] = None,
    project_name: Optional[str] = None,
    compose_files: Optional[List[str]] = None,
) -> Project:
    """Loads the project from a snapshot file if given, otherwise from the compose CLI."""
    if project_file is not None:
        return load_project_file(project_file)
    return app_context.resolver.resolve(compose_files=compose_files, project_name=project_name)


def down_logic(
    app_context: AppContext,
    project: Project,
    remove_volumes: bool = False,
    cancel_event: Optional[threading.Event] = None,
) -> TeardownReport:
    """Business logic for tearing down a project."""
    log.info(f"Tearing down project {project.name}...")
    report = app_context.teardown.down(project, remove_volumes=remove_volumes, cancel_event=cancel_event)

    if report.failures:
        log.warning(
            f"{len(report.failures)} resources could not be removed. "
            "Run `down` again once the cause is fixed."
        )
    return report


def down(
    ctx: typer.Context,
    volumes: Annotated[
        bool,
        typer.Option(
            "--volumes", "-v",
            help="Also remove the project's named volumes and the anonymous volumes of its containers.",
        ),
    ] = False,
    project_file: Annotated[
        Optional[Path],
        typer.Option(
            "--project-file",
            help="Read the project from a JSON snapshot instead of the compose CLI.",
        ),
    ] = None,
    project_name: Annotated[
        Optional[str],
        typer.Option("--project-name", "-p", help="Compose project name."),
    ] = None,
    files: Annotated[
        Optional[List[str]],
        typer.Option("--file", "-f", help="Compose file(s) to resolve the project from."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the teardown report as JSON."),
    ] = False,
):
    """Stops and removes the project's containers, networks and optionally volumes."""
    app_context: AppContext = ctx.obj

    try:
        project = resolve_project(app_context, project_file, project_name, files)
    except ProjectLoadError as e:
        app_context.display.error(str(e), suggestion="Check the compose files or pass --project-file.")
        raise typer.Exit(code=1)

    cancel_event = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: cancel_event.set())
    try:
        report = down_logic(app_context, project, remove_volumes=volumes, cancel_event=cancel_event)
    except TeardownCancelled:
        log.warning("Teardown cancelled; some resources may remain.")
        raise typer.Exit(code=130)
    except TeardownError as e:
        app_context.display.error(str(e), suggestion="Run `compose-teardown check` to verify the Docker setup.")
        raise typer.Exit(code=1)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    if json_output:
        app_context.display.json(report.model_dump_json(indent=2))
    else:
        app_context.display.teardown_report(report)
        if not report.failures:
            app_context.display.success(f"Project {project.name} torn down.")
