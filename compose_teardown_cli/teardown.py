import logging
import threading
from typing import Any, Callable, List, Optional, Protocol

from .errors import TeardownError, TeardownCancelled
from .schemas import (
    ContainerInfo,
    Project,
    ResourceKind,
    ResourceOutcome,
    ResourceState,
    TeardownReport,
)

log = logging.getLogger(__name__)


class ContainerDirectory(Protocol):
    def list_containers(self, project_name: str, service: str) -> List[Any]:
        ...

    def fetch_metadata(self, container: Any) -> ContainerInfo:
        ...


class ResourceExecutor(Protocol):
    def network_exists(self, name: str) -> bool:
        ...

    def volume_exists(self, name: str) -> bool:
        ...

    def remove_container(self, container_id: str, remove_volumes: bool) -> None:
        ...

    def remove_network(self, name: str) -> None:
        ...

    def remove_volume(self, name: str, force: bool) -> None:
        ...


def declared_order(project: Project) -> List[str]:
    """Default ordering source: the service order the project was resolved with."""
    return list(project.services)


class Teardown:
    """
    Removes a project's containers, then its networks, then optionally its volumes.

    Services are processed in reverse dependency order so dependents go before
    the services they depend on. Failing to remove a single resource is logged
    and recorded in the report; failing to enumerate resources raises
    TeardownError.
    """

    def __init__(
        self,
        directory: ContainerDirectory,
        executor: ResourceExecutor,
        ordering: Callable[[Project], List[str]] = declared_order,
    ):
        self.directory = directory
        self.executor = executor
        self.ordering = ordering

    def down(
        self,
        project: Project,
        remove_volumes: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> TeardownReport:
        report = TeardownReport(project=project.name, remove_volumes=remove_volumes)

        _check_cancelled(cancel_event)
        try:
            service_names = self.ordering(project)
        except Exception as e:
            raise TeardownError(f"could not determine service order for project {project.name!r}: {e}") from e

        # reverse dependency order
        for service in reversed(service_names):
            _check_cancelled(cancel_event)
            try:
                containers = self.directory.list_containers(project.name, service)
            except Exception as e:
                raise TeardownError(f"could not list containers of service {service!r}: {e}") from e
            log.debug(f"Found {len(containers)} containers for service {service}")
            report.outcomes.extend(
                self.down_containers(service, containers, remove_volumes, cancel_event)
            )

        for short_name in project.networks:
            report.outcomes.append(self.down_network(project, short_name, cancel_event))

        if remove_volumes:
            for short_name in project.volumes:
                report.outcomes.append(self.down_volume(project, short_name, cancel_event))

        if report.failures:
            log.warning(f"Teardown of {project.name} finished with {len(report.failures)} resources left behind")
        else:
            log.debug(f"Teardown of {project.name} finished")
        return report

    def down_containers(
        self,
        service: str,
        containers: List[Any],
        remove_anonymous_volumes: bool,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ResourceOutcome]:
        outcomes = []
        for container in containers:
            _check_cancelled(cancel_event)
            info = self.directory.fetch_metadata(container)
            name = info.name or info.id
            log.info(f"Removing container {name}")
            try:
                self.executor.remove_container(info.id, remove_anonymous_volumes)
            except Exception as e:
                log.warning(f"Failed to remove container {name}: {e}")
                outcomes.append(ResourceOutcome(
                    kind=ResourceKind.CONTAINER,
                    name=name,
                    service=service,
                    state=ResourceState.REMOVAL_FAILED,
                    error=str(e),
                ))
                continue
            outcomes.append(ResourceOutcome(
                kind=ResourceKind.CONTAINER,
                name=name,
                service=service,
                state=ResourceState.REMOVED,
            ))
        return outcomes

    def down_network(
        self,
        project: Project,
        short_name: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> ResourceOutcome:
        network = project.networks.get(short_name)
        if network is None:
            raise TeardownError(f"invalid network name {short_name!r}")
        return self._down_declared(
            ResourceKind.NETWORK,
            network.name,
            network.external,
            self.executor.network_exists,
            self.executor.remove_network,
            cancel_event,
        )

    def down_volume(
        self,
        project: Project,
        short_name: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> ResourceOutcome:
        volume = project.volumes.get(short_name)
        if volume is None:
            raise TeardownError(f"invalid volume name {short_name!r}")
        return self._down_declared(
            ResourceKind.VOLUME,
            volume.name,
            volume.external,
            self.executor.volume_exists,
            lambda name: self.executor.remove_volume(name, force=True),
            cancel_event,
        )

    def _down_declared(
        self,
        kind: ResourceKind,
        full_name: str,
        external: bool,
        exists: Callable[[str], bool],
        remove: Callable[[str], None],
        cancel_event: Optional[threading.Event],
    ) -> ResourceOutcome:
        if external:
            log.debug(f"Skipping external {kind.value} {full_name}")
            return ResourceOutcome(kind=kind, name=full_name, state=ResourceState.SKIPPED_EXTERNAL)

        _check_cancelled(cancel_event)
        try:
            present = exists(full_name)
        except Exception as e:
            raise TeardownError(f"could not check whether {kind.value} {full_name!r} exists: {e}") from e
        if not present:
            log.debug(f"{kind.value.capitalize()} {full_name} does not exist")
            return ResourceOutcome(kind=kind, name=full_name, state=ResourceState.SKIPPED_ABSENT)

        log.info(f"Removing {kind.value} {full_name}")
        _check_cancelled(cancel_event)
        try:
            remove(full_name)
        except Exception as e:
            log.warning(f"Failed to remove {kind.value} {full_name}: {e}")
            return ResourceOutcome(
                kind=kind,
                name=full_name,
                state=ResourceState.REMOVAL_FAILED,
                error=str(e),
            )
        return ResourceOutcome(kind=kind, name=full_name, state=ResourceState.REMOVED)


def _check_cancelled(cancel_event: Optional[threading.Event]):
    if cancel_event is not None and cancel_event.is_set():
        raise TeardownCancelled("teardown cancelled")
