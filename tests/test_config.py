import json
from pathlib import Path
from unittest.mock import MagicMock
import pytest

from compose_teardown_cli.config import load_config, save_config, Config
from compose_teardown_cli.schemas import AppConfig


def test_load_config_creates_default_when_not_exists(tmp_path: Path, mock_display: MagicMock):
    """
    Tests that a default config is created if one doesn't exist.
    """
    config_file = tmp_path / "config.json"
    env_file = tmp_path / ".env"

    config, fell_back = load_config(mock_display, config_file, env_file)

    assert config_file.exists()
    assert isinstance(config, AppConfig)
    assert config.compose_files == ["docker-compose.yml"]
    assert config.compose_command == ["docker", "compose"]
    assert config.project_name is None
    assert fell_back is False


def test_save_and_load_config(tmp_path: Path, mock_display: MagicMock):
    config_file = tmp_path / "config.json"
    env_file = tmp_path / ".env"
    custom_config = AppConfig(
        project_name="wordpress",
        compose_files=["base.yml", "prod.yml"],
        compose_command=["docker-compose"],
        docker_timeout=120,
    )

    save_config(mock_display, custom_config, config_file)
    loaded, fell_back = load_config(mock_display, config_file, env_file)

    assert loaded == custom_config
    assert fell_back is False


def test_env_file_overrides_config(tmp_path: Path, mock_display: MagicMock):
    config_file = tmp_path / "config.json"
    env_file = tmp_path / ".env"
    save_config(mock_display, AppConfig(project_name="from-json"), config_file)
    env_file.write_text("COMPOSE_PROJECT_NAME=from-env\nCOMPOSE_FILE=a.yml:b.yml\n")

    config, _ = load_config(mock_display, config_file, env_file)

    assert config.project_name == "from-env"
    assert config.compose_files == ["a.yml", "b.yml"]


def test_load_config_falls_back_on_invalid_json(tmp_path: Path, mock_display: MagicMock):
    config_file = tmp_path / "config.json"
    config_file.write_text("{invalid")

    config, fell_back = load_config(mock_display, config_file, tmp_path / ".env")

    assert fell_back is True
    assert config == AppConfig()


def test_load_config_falls_back_on_validation_error(tmp_path: Path, mock_display: MagicMock):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"docker_timeout": -5}))

    config, fell_back = load_config(mock_display, config_file, tmp_path / ".env")

    assert fell_back is True
    assert config.docker_timeout == 60


def test_config_class(tmp_path: Path, mock_display: MagicMock):
    config_file = tmp_path / "config.json"
    config = Config(mock_display, config_path=config_file, env_path=tmp_path / ".env")

    assert config.fell_back_to_defaults is False
    config.app_config.project_name = "saved"
    config.save()

    data = json.loads(config_file.read_text())
    assert data["project_name"] == "saved"
