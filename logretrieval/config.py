"""Configuration: frozen dataclass built from defaults, an optional YAML file, and env vars.

Precedence (lowest to highest): dataclass defaults, YAML file, environment.
The YAML path comes from the ``path`` argument or the ``CONFIG_PATH``
environment variable.
"""

import logging
import os
from dataclasses import dataclass

import yaml

from logretrieval.catalog import DEFAULT_PREFIX, DEFAULT_SUFFIX, LogCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    log_dir: str = "./logs"
    file_prefix: str = DEFAULT_PREFIX
    file_suffix: str = DEFAULT_SUFFIX
    max_workers: int = 1
    lookback_days: int = 0  # 0 = scan every file
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    def catalog(self) -> LogCatalog:
        return LogCatalog(self.log_dir, prefix=self.file_prefix, suffix=self.file_suffix)


# env var → (field, converter)
_ENV_FIELDS = {
    "LOG_DIR": ("log_dir", str),
    "LOG_FILE_PREFIX": ("file_prefix", str),
    "LOG_FILE_SUFFIX": ("file_suffix", str),
    "MAX_WORKERS": ("max_workers", int),
    "LOOKBACK_DAYS": ("lookback_days", int),
    "HOST": ("host", str),
    "PORT": ("port", int),
    "LOG_LEVEL": ("log_level", str),
}


def load_yaml(path: str) -> dict:
    """Load a YAML mapping from *path*.

    A missing file or an empty document gives {}. Invalid YAML is logged
    and ignored so the service still starts on defaults.
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as exc:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _from_yaml(data: dict) -> dict:
    """Flatten the YAML layout into Config keyword arguments."""
    values = {}
    for key in ("log_dir", "file_prefix", "file_suffix", "log_level"):
        if key in data:
            values[key] = str(data[key])
    for key in ("max_workers", "lookback_days"):
        if key in data:
            values[key] = int(data[key])

    server = data.get("server") or {}
    if "host" in server:
        values["host"] = str(server["host"])
    if "port" in server:
        values["port"] = int(server["port"])
    return values


def load_config(path: str | None = None) -> Config:
    """Build Config from an optional YAML file plus environment variables."""
    values = {}

    path = path or os.environ.get("CONFIG_PATH")
    if path:
        values.update(_from_yaml(load_yaml(path)))

    for env_key, (field_name, convert) in _ENV_FIELDS.items():
        raw = os.environ.get(env_key)
        if raw is not None:
            values[field_name] = convert(raw)

    return Config(**values)
