class TeardownError(Exception):
    """
    A structural failure that aborts a teardown.

    Raised for an unknown network/volume short name, a failure to obtain the
    service list or to list a service's containers, or a failed existence check.
    Failures to remove an individual resource are never raised; they end up in
    the TeardownReport instead.
    """


class TeardownCancelled(TeardownError):
    """The caller's cancellation event was set between two teardown steps."""


class ProjectLoadError(Exception):
    """The project could not be resolved from the compose CLI or a snapshot file."""


class DockerUnavailableError(Exception):
    """No connection to the Docker daemon."""
