import logging
import os
from pathlib import Path
from typing import Optional, Union

import pydantic
import yaml
from pydantic import BaseModel

from credkit.errors import ConfigError

logger = logging.getLogger(__name__)

# Configuration
CONFIG_HOME = Path.home() / ".config" / "credkit"
DEFAULT_CONFIG_FILE = CONFIG_HOME / "config.yaml"


class Config(BaseModel):
    api_url: Optional[str] = None
    access_token: Optional[str] = None
    ca_cert: Optional[Path] = None
    skip_tls_validation: bool = False
    timeout: float = 30.0

    def require_api_url(self) -> str:
        if not self.api_url:
            msg = (
                "No API URL configured. Set 'api_url' in "
                f"{DEFAULT_CONFIG_FILE} or export CREDKIT_API_URL."
            )
            raise ConfigError(msg)
        return self.api_url.rstrip("/")


def config_path(file_path: Union[str, Path, None] = None) -> Path:
    """Return the config file to read: explicit path, then CREDKIT_CONFIG, then the default."""
    if file_path:
        return Path(file_path)
    return Path(os.getenv("CREDKIT_CONFIG", str(DEFAULT_CONFIG_FILE)))


def load_config(file_path: Union[str, Path, None] = None) -> Config:
    """
    Load and validate configuration from YAML file and environment.

    A missing default file is not an error; defaults apply. A file named
    explicitly, by argument or CREDKIT_CONFIG, must exist. CREDKIT_API_URL
    and CREDKIT_ACCESS_TOKEN override the file.

    Args:
        file_path: Path to the YAML configuration file

    Returns:
        Validated Config object

    Raises:
        ConfigError: If an explicit file is missing, or the file is unreadable,
            malformed or doesn't match the schema
    """
    explicit = bool(file_path or os.getenv("CREDKIT_CONFIG"))
    path = config_path(file_path)
    data: dict = {}

    if path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            msg = f"Failed to read config file at {path}: {e}"
            raise ConfigError(msg) from e
        if not isinstance(data, dict):
            msg = f"Config file at {path} must contain a mapping"
            raise ConfigError(msg)
        logger.debug("Loaded config from %s", path)
    elif explicit:
        msg = f"Config file not found: {path}"
        raise ConfigError(msg)
    else:
        logger.debug("No config file at %s, using defaults", path)

    for key, env_var in (("api_url", "CREDKIT_API_URL"), ("access_token", "CREDKIT_ACCESS_TOKEN")):
        value = os.getenv(env_var)
        if value:
            data[key] = value

    try:
        return Config(**data)
    except pydantic.ValidationError as e:
        msg = f"Invalid configuration in {path}: {e}"
        raise ConfigError(msg) from e
