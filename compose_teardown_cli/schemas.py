from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional, List, Dict, Any
from enum import Enum


class AppConfig(BaseModel):
    project_name: Optional[str] = None
    compose_files: List[str] = Field(default_factory=lambda: ["docker-compose.yml"])
    compose_command: List[str] = Field(default_factory=lambda: ["docker", "compose"])
    docker_timeout: int = Field(default=60, gt=0)


class DeclaredResource(BaseModel):
    """A network or volume declared by the project. `name` is the full, daemon-wide name."""
    name: str
    external: bool = False

    @field_validator("external", mode="before")
    @classmethod
    def coerce_external(cls, value: Any) -> Any:
        # Older compose files spell it `external: {name: ...}`.
        if isinstance(value, dict):
            return bool(value.get("external", True))
        return value


class NetworkConfig(DeclaredResource):
    pass


class VolumeConfig(DeclaredResource):
    pass


class Project(BaseModel):
    """
    The resources a compose project owns, as resolved upstream.

    `services` holds the service short names in dependency (creation) order.
    `networks` and `volumes` are keyed by short name, e.g. "default" for the
    network named "wordpress_default".
    """
    model_config = {"frozen": True}

    name: str
    services: List[str] = Field(default_factory=list)
    networks: Dict[str, NetworkConfig] = Field(default_factory=dict)
    volumes: Dict[str, VolumeConfig] = Field(default_factory=dict)


class ContainerInfo(BaseModel):
    id: str
    name: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)


class ResourceKind(str, Enum):
    CONTAINER = "container"
    NETWORK = "network"
    VOLUME = "volume"


class ResourceState(str, Enum):
    """Terminal state of a single resource after teardown."""
    REMOVED = "removed"
    SKIPPED_EXTERNAL = "skipped_external"
    SKIPPED_ABSENT = "skipped_absent"
    REMOVAL_FAILED = "removal_failed"


class ResourceOutcome(BaseModel):
    kind: ResourceKind
    name: str
    state: ResourceState
    service: Optional[str] = None
    error: Optional[str] = None


class TeardownReport(BaseModel):
    project: str
    remove_volumes: bool = False
    outcomes: List[ResourceOutcome] = Field(default_factory=list)

    @property
    def failures(self) -> List[ResourceOutcome]:
        return [o for o in self.outcomes if o.state == ResourceState.REMOVAL_FAILED]

    @computed_field
    @property
    def succeeded(self) -> bool:
        """A returned report always succeeded; structural failures raise TeardownError instead."""
        return True

    def of_kind(self, kind: ResourceKind) -> List[ResourceOutcome]:
        return [o for o in self.outcomes if o.kind == kind]


class EnvironmentCheck(BaseModel):
    name: str
    passed: bool
    details: Optional[str] = None
    suggestion: Optional[str] = None


class CheckReport(BaseModel):
    checks: List[EnvironmentCheck]
