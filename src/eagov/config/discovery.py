"""Config file discovery and reading.

Walk-up finder locates eagov.toml, similar to how git finds .git/.
Supports EAGOV_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eagov.config.models import EagovConfig, describe_validation_error
from eagov.domain.errors import ConfigurationError

CONFIG_FILENAME = "eagov.toml"
CONFIG_ENV_VAR = "EAGOV_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for eagov.toml.

    Returns the path to the config file, or None if not found.
    Checks EAGOV_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* and check it against :class:`EagovConfig`.

    Returns the raw TOML tables so settings sources can merge them
    under env vars. Errors name the file.
    """
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read config {path}: {exc.strerror or exc}"
        raise ConfigurationError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc
    try:
        EagovConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}: {describe_validation_error(exc)}"
        raise ConfigurationError(msg) from exc
    return data
