import sys
import logging
from .config import Config
from .display import Display
from .docker_client import DockerClient
from .project import ComposeProjectResolver
from .teardown import Teardown

log = logging.getLogger(__name__)

class AppContext:
    """A central container for the application's runtime state."""

    def __init__(self, verbose: bool = False):
        try:
            self.display = Display(verbose=verbose)
            self.config = Config(self.display)
            self.docker_client = DockerClient(self.config.app_config)
            self.resolver = ComposeProjectResolver(self.config.app_config)
            self.teardown = Teardown(self.docker_client, self.docker_client)
        except Exception as e:
            log.error(f"Failed to initialize application: {e}", exc_info=True)
            sys.exit(1)

    @property
    def verbose(self) -> bool:
        return self.display.verbose
