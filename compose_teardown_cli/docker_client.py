import docker
import logging
from pathlib import Path
from typing import List

from .errors import DockerUnavailableError
from .schemas import AppConfig, CheckReport, ContainerInfo, EnvironmentCheck

log = logging.getLogger(__name__)

PROJECT_LABEL = "com.docker.compose.project"
SERVICE_LABEL = "com.docker.compose.service"


class DockerClient:
    """
    A wrapper for the Docker operations a teardown needs.

    Acts as both the container directory (finding a service's containers by
    their compose labels) and the resource executor (existence checks and
    removals). Errors from the daemon are raised as docker.errors exceptions.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        try:
            self.client = docker.from_env(timeout=config.docker_timeout)
            self.client.ping()  # Test connection
            log.debug("Docker client initialized successfully")
        except docker.errors.DockerException as e:
            log.error(f"Failed to initialize Docker client: {e}")
            # Don't raise here - let individual operations handle Docker unavailability
            self.client = None

    def _require_client(self):
        if self.client is None:
            raise DockerUnavailableError("Docker daemon is not available")
        return self.client

    # =============================================================================
    # Container Directory
    # =============================================================================

    def list_containers(self, project_name: str, service: str) -> list:
        """Lists running and stopped containers of one compose service."""
        filters = {"label": [f"{PROJECT_LABEL}={project_name}", f"{SERVICE_LABEL}={service}"]}
        return self._require_client().containers.list(all=True, filters=filters, ignore_removed=True)

    def fetch_metadata(self, container) -> ContainerInfo:
        """
        Reads id, name and labels from the container's cached attributes.

        The container is not reloaded; a stale snapshot is good enough to
        name the container in the output and this never raises.
        """
        attrs = getattr(container, "attrs", None) or {}
        labels = (attrs.get("Config") or {}).get("Labels") or attrs.get("Labels") or {}
        name = attrs.get("Name") or next(iter(attrs.get("Names") or []), "")
        return ContainerInfo(
            id=attrs.get("Id") or getattr(container, "id", None) or "",
            name=name.lstrip("/"),
            labels=labels,
        )

    # =============================================================================
    # Resource Executor
    # =============================================================================

    def network_exists(self, name: str) -> bool:
        try:
            self._require_client().networks.get(name)
        except docker.errors.NotFound:
            return False
        return True

    def volume_exists(self, name: str) -> bool:
        try:
            self._require_client().volumes.get(name)
        except docker.errors.NotFound:
            return False
        return True

    def remove_container(self, container_id: str, remove_volumes: bool) -> None:
        """Force-removes a container, and its anonymous volumes when remove_volumes is set."""
        self._require_client().api.remove_container(container_id, v=remove_volumes, force=True)
        log.debug(f"Removed container: {container_id}")

    def remove_network(self, name: str) -> None:
        self._require_client().api.remove_network(name)
        log.debug(f"Removed network: {name}")

    def remove_volume(self, name: str, force: bool) -> None:
        self._require_client().api.remove_volume(name, force=force)
        log.debug(f"Removed volume: {name}")

    # =============================================================================
    # Environment Validation
    # =============================================================================

    def run_environment_checks(self, compose_files: List[str]) -> CheckReport:
        """Checks that the daemon answers and the compose files are present."""
        checks = []

        try:
            self._require_client().ping()
            checks.append(EnvironmentCheck(
                name="Docker Daemon Running",
                passed=True,
                details="Docker daemon is accessible and responding"
            ))
        except (docker.errors.DockerException, DockerUnavailableError) as e:
            log.error(f"Docker daemon check failed: {e}")
            checks.append(EnvironmentCheck(
                name="Docker Daemon Running",
                passed=False,
                details=f"Docker daemon is not running or not accessible: {e}",
                suggestion="Please start Docker (or set DOCKER_HOST) and try again."
            ))

        for compose_file in compose_files:
            if Path(compose_file).exists():
                log.debug(f"Compose file found: {compose_file}")
                checks.append(EnvironmentCheck(
                    name=f"Compose File: {compose_file}",
                    passed=True,
                    details=f"Compose file exists: {compose_file}"
                ))
            else:
                log.warning(f"Compose file missing: {compose_file}")
                checks.append(EnvironmentCheck(
                    name=f"Compose File: {compose_file}",
                    passed=False,
                    details=f"Compose file not found: {compose_file}",
                    suggestion="Run from the project directory, pass --file, or use --project-file with a snapshot"
                ))

        return CheckReport(checks=checks)
