"""Assistant configuration."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_APM_INDICES = ["apm-*"]

# Environment variable -> config field
ENV_OVERRIDES: Dict[str, str] = {
    "ES_URL": "url",
    "ES_USERNAME": "username",
    "ES_PASSWORD": "password",
    "ES_API_KEY": "api_key",
}


class AssistantConfig(BaseModel):
    """Connection and check settings."""

    url: str = "http://localhost:9200"
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None
    verify_certs: bool = True
    cloud_enabled: bool = False
    apm_indices: List[str] = Field(default_factory=lambda: list(DEFAULT_APM_INDICES))

    def merged(self, **overrides: Any) -> "AssistantConfig":
        """Return a copy with the non-None overrides applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=updates)


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read a YAML or JSON config file into a dictionary."""
    with open(config_path, "r") as f:
        if config_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data


def load_config(
    config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None
) -> AssistantConfig:
    """Load configuration from file and environment.

    Values from the environment override the file. A missing path yields defaults.
    """
    data: Dict[str, Any] = {}

    if config_path is not None:
        if config_path.exists():
            data = _read_config_file(config_path)
            logger.info(f"Loaded config from {config_path}")
        else:
            logger.warning(f"Config file {config_path} not found, using defaults")

    env = os.environ if environ is None else environ
    for env_var, field_name in ENV_OVERRIDES.items():
        if env.get(env_var):
            data[field_name] = env[env_var]

    return AssistantConfig(**data)
