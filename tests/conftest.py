import pytest
from unittest.mock import MagicMock

from compose_teardown_cli.schemas import ContainerInfo, NetworkConfig, Project, VolumeConfig


class FakeDocker:
    """
    In-memory container directory and resource executor.

    Every call is appended to `calls` so tests can assert on ordering.
    Names in `fail_removal` raise on removal; services in `fail_listing`
    raise on lookup.
    """

    def __init__(self, containers=None, networks=(), volumes=()):
        self.containers = {svc: list(cs) for svc, cs in (containers or {}).items()}
        self.networks = set(networks)
        self.volumes = set(volumes)
        self.calls = []
        self.fail_removal = set()
        self.fail_listing = set()
        self.fail_exists = set()

    def list_containers(self, project_name, service):
        self.calls.append(("list", service))
        if service in self.fail_listing:
            raise RuntimeError(f"cannot list {service}")
        return list(self.containers.get(service, []))

    def fetch_metadata(self, container):
        return container

    def network_exists(self, name):
        self.calls.append(("network_exists", name))
        if name in self.fail_exists:
            raise RuntimeError(f"cannot inspect {name}")
        return name in self.networks

    def volume_exists(self, name):
        self.calls.append(("volume_exists", name))
        if name in self.fail_exists:
            raise RuntimeError(f"cannot inspect {name}")
        return name in self.volumes

    def remove_container(self, container_id, remove_volumes):
        self.calls.append(("remove_container", container_id, remove_volumes))
        if container_id in self.fail_removal:
            raise RuntimeError(f"container {container_id} is stuck")
        for containers in self.containers.values():
            containers[:] = [c for c in containers if c.id != container_id]

    def remove_network(self, name):
        self.calls.append(("remove_network", name))
        if name in self.fail_removal:
            raise RuntimeError(f"network {name} has active endpoints")
        self.networks.discard(name)

    def remove_volume(self, name, force):
        self.calls.append(("remove_volume", name, force))
        if name in self.fail_removal:
            raise RuntimeError(f"volume {name} is in use")
        self.volumes.discard(name)

    def removals(self):
        return [c for c in self.calls if c[0].startswith("remove_")]


def container(service, index=1, project="proj"):
    return ContainerInfo(
        id=f"{service}{index}",
        name=f"{project}-{service}-{index}",
        labels={"com.docker.compose.project": project, "com.docker.compose.service": service},
    )


@pytest.fixture
def web_db_project():
    """web depends on db; one private network and one named volume."""
    return Project(
        name="proj",
        services=["db", "web"],
        networks={"default": NetworkConfig(name="proj_default")},
        volumes={"data": VolumeConfig(name="proj_data")},
    )


@pytest.fixture
def fake_docker():
    return FakeDocker(
        containers={
            "web": [container("web", 1), container("web", 2)],
            "db": [container("db", 1)],
        },
        networks={"proj_default"},
        volumes={"proj_data"},
    )


@pytest.fixture
def make_container():
    return container


@pytest.fixture
def fake_docker_factory():
    return FakeDocker


@pytest.fixture
def mock_display():
    """Fixture to create a mocked Display object."""
    return MagicMock()


@pytest.fixture
def mock_app_context():
    """Fixture to mock the AppContext and its components."""
    mock_context = MagicMock()
    mock_context.display = MagicMock()
    mock_context.config = MagicMock()
    mock_context.config.fell_back_to_defaults = False
    mock_context.docker_client = MagicMock()
    mock_context.resolver = MagicMock()
    mock_context.teardown = MagicMock()
    return mock_context
