import json
import logging
from pathlib import Path
from pydantic import ValidationError
from dotenv import dotenv_values

from .schemas import AppConfig
from .display import Display

log = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".compose-teardown"
DEFAULT_ENV_FILE = DEFAULT_CONFIG_DIR / ".env"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"


def load_config(
    display: Display,
    config_path: Path = DEFAULT_CONFIG_FILE,
    env_path: Path = DEFAULT_ENV_FILE,
) -> tuple[AppConfig, bool]:
    """
    Loads the application configuration from JSON and .env files.
    If the JSON file doesn't exist, it creates a default one.

    Returns:
        tuple: (AppConfig, fell_back_to_defaults)
    """
    if not config_path.exists():
        log.debug(f"Creating default configuration file {config_path}")
        app_config = AppConfig()
        save_config(display, app_config, config_path)
        return _apply_env(app_config, env_path), False

    try:
        with open(config_path, "r") as f:
            data = json.load(f)
        app_config = AppConfig(**data)
        return _apply_env(app_config, env_path), False
    except (json.JSONDecodeError, ValidationError) as e:
        log.debug(f"Config fallback: {type(e).__name__}")
        return _apply_env(AppConfig(), env_path), True


def _apply_env(app_config: AppConfig, env_path: Path) -> AppConfig:
    """Overrides config values with the compose variables found in the .env file."""
    if not env_path.exists():
        return app_config

    env_vars = dotenv_values(env_path)
    if env_vars.get("COMPOSE_PROJECT_NAME"):
        app_config.project_name = env_vars.get("COMPOSE_PROJECT_NAME")
    if env_vars.get("COMPOSE_FILE"):
        app_config.compose_files = [f for f in env_vars["COMPOSE_FILE"].split(":") if f]
    return app_config


def save_config(
    display: Display,
    config: AppConfig,
    config_path: Path = DEFAULT_CONFIG_FILE,
):
    """Saves the application configuration to a JSON file."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            f.write(config.model_dump_json(indent=4))
    except IOError:
        log.error(f"Could not save configuration to {config_path}.", exc_info=True)


class Config:
    """A configuration manager that handles loading and accessing app configuration."""

    def __init__(self, display: Display, config_path: Path = DEFAULT_CONFIG_FILE, env_path: Path = DEFAULT_ENV_FILE):
        self._display = display
        self._config_path = config_path
        self._env_path = env_path
        self._app_config, self._fell_back_to_defaults = load_config(display, config_path, env_path)

    @property
    def app_config(self) -> AppConfig:
        """Returns the loaded AppConfig object."""
        return self._app_config

    @property
    def fell_back_to_defaults(self) -> bool:
        """Returns True if the config fell back to defaults due to loading errors."""
        return self._fell_back_to_defaults

    def save(self):
        save_config(self._display, self._app_config, self._config_path)
