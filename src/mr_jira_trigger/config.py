# src/mr_jira_trigger/config.py
from pathlib import Path

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mr_jira_trigger.errors import ConfigError
from mr_jira_trigger.models.config import TriggerConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="MR_JIRA_TRIGGER_")

    config_path: str = "config.yml"
    host: str = "0.0.0.0"

    # Defaults
    bot_name: str = "MR Jira Trigger"
    http_timeout: float = 30.0
    log_level: str = "INFO"


def load_config(path: str | Path) -> TriggerConfig:
    """Read and validate the YAML trigger configuration."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError("Read YAML file error", e) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError("YAML unmarshal error", e) from e

    if not isinstance(data, dict):
        raise ConfigError("YAML unmarshal error", "top-level mapping expected")

    try:
        return TriggerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError("YAML file configs validate error", e) from e
