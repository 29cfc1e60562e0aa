"""
Resolving the Project a teardown works on.

The compose file itself is never parsed here. A project comes either from a
JSON snapshot written upstream, or from the compose CLI's own resolved
configuration (`config --format json`), which already carries full resource
names and external flags.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import List, Optional
from pydantic import ValidationError

from .errors import ProjectLoadError
from .schemas import AppConfig, NetworkConfig, Project, VolumeConfig

log = logging.getLogger(__name__)


def load_project_file(path: Path) -> Project:
    """Loads a project snapshot: {"name", "services", "networks", "volumes"}."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ProjectLoadError(f"Project file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ProjectLoadError(f"Project file {path} is not valid JSON: {e}") from e

    try:
        project = Project(**data)
    except (TypeError, ValidationError) as e:
        raise ProjectLoadError(f"Invalid project file {path}: {e}") from e
    log.debug(f"Loaded project {project.name} from {path}")
    return project


class ComposeProjectResolver:
    """Asks the compose CLI for the resolved project configuration."""

    def __init__(self, config: AppConfig):
        self.config = config

    def _run_compose_command(self, command: List[str], compose_files: List[str], project_name: Optional[str]) -> str:
        base_cmd = list(self.config.compose_command)
        for file in compose_files:
            base_cmd.extend(["-f", file])
        if project_name:
            base_cmd.extend(["-p", project_name])

        full_cmd = base_cmd + command
        log.debug(f"Running `{' '.join(full_cmd)}`")
        try:
            process = subprocess.run(full_cmd, capture_output=True, text=True, encoding="utf-8")
        except FileNotFoundError as e:
            raise ProjectLoadError(f"{full_cmd[0]} command not found. Is it installed and in your PATH?") from e

        if process.returncode != 0:
            raise ProjectLoadError(
                f"Compose command failed with exit code {process.returncode}. "
                f"Command: `{' '.join(full_cmd)}` Output: {process.stderr.strip()}"
            )
        return process.stdout

    def resolve(self, compose_files: Optional[List[str]] = None, project_name: Optional[str] = None) -> Project:
        compose_files = compose_files or self.config.compose_files
        project_name = project_name or self.config.project_name

        output = self._run_compose_command(["config", "--format", "json"], compose_files, project_name)
        try:
            resolved = json.loads(output)
        except json.JSONDecodeError as e:
            raise ProjectLoadError(f"Compose returned invalid JSON: {e}") from e

        name = resolved.get("name") or project_name
        if not name:
            raise ProjectLoadError("Could not determine the compose project name")

        # Service order is whatever order compose reports; it is not recomputed here.
        services_output = self._run_compose_command(["config", "--services"], compose_files, project_name)
        services = [line.strip() for line in services_output.splitlines() if line.strip()]

        try:
            networks = {
                short: NetworkConfig(name=(spec or {}).get("name") or f"{name}_{short}",
                                     external=(spec or {}).get("external", False))
                for short, spec in (resolved.get("networks") or {}).items()
            }
            volumes = {
                short: VolumeConfig(name=(spec or {}).get("name") or f"{name}_{short}",
                                    external=(spec or {}).get("external", False))
                for short, spec in (resolved.get("volumes") or {}).items()
            }
            project = Project(name=name, services=services, networks=networks, volumes=volumes)
        except ValidationError as e:
            raise ProjectLoadError(f"Unexpected compose configuration: {e}") from e

        log.debug(
            f"Resolved project {project.name}: {len(project.services)} services, "
            f"{len(project.networks)} networks, {len(project.volumes)} volumes"
        )
        return project
