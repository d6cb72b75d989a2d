# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Settings loading for updateskip.

The engine works out of the box with no configuration: everything lives under
``~/.m2`` and both time windows are one minute. A YAML settings file can
override any of these, which is mostly useful for tests and for hosts that
keep their local repository somewhere else.

Settings File
-------------
A single top-level mapping. Every key is optional::

    m2_root: ~/work/.m2
    status_file_name: mercedes.properties
    artifact_info_name: mercedes.artifactInfo
    update_info_name: mercedes.updateInfo
    recency_window_ms: 60000
    buffer_ms: 60000
    force_update: false

Functions
---------
default_m2_root : function
    ``~/.m2`` for the current user.
load_settings : function
    Build SkipCheckSettings from defaults plus an optional YAML file.

Error Handling
--------------
- ConfigError: YAML parse errors, non-mapping documents, unknown keys,
  wrong value types, negative windows
- A missing settings file is an error only when a path was given explicitly
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from updateskip.exceptions import ConfigError
from updateskip.logging import Logger, get_global_logger

ONE_MINUTE_MS = 60_000


def default_m2_root() -> Path:
    """Return the user-scoped configuration root (``~/.m2``)."""
    return Path.home() / ".m2"


@dataclass(frozen=True)
class SkipCheckSettings:
    """
    Effective settings for the decision engine.

    Attributes:
        m2_root: Configuration root holding the status file and repository.
        status_file_name: Daemon status file name under m2_root.
        artifact_info_name: Daemon-maintained per-artifact record name.
        update_info_name: Self-maintained per-artifact check record name.
        recency_window_ms: How recent the daemon status must be to be trusted.
        buffer_ms: Grace margin when comparing daemon and self timestamps.
        force_update: Never skip; always perform the real remote check.
    """

    m2_root: Path = field(default_factory=default_m2_root)
    status_file_name: str = "mercedes.properties"
    artifact_info_name: str = "mercedes.artifactInfo"
    update_info_name: str = "mercedes.updateInfo"
    recency_window_ms: int = ONE_MINUTE_MS
    buffer_ms: int = ONE_MINUTE_MS
    force_update: bool = False

    @property
    def status_path(self) -> Path:
        return self.m2_root / self.status_file_name

    @property
    def repository_root(self) -> Path:
        return self.m2_root / "repository"


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Load a YAML file and return the parsed Python object.

    Raises:
      ConfigError - when the file is missing, unreadable or not valid YAML
    """
    if not p.exists():
        raise ConfigError(f"settings file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"Error reading settings file: {p}: {err}") from err


# -------------------------------
# Value coercion
# -------------------------------


def _coerce(name: str, value: Any) -> Any:
    """
    Validate one settings value and convert it to its field type.
    """
    if name == "m2_root":
        if not isinstance(value, str) or not value.strip():
            raise ConfigError("m2_root must be a non-empty string")
        return Path(value).expanduser()

    if name in ("recency_window_ms", "buffer_ms"):
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{name} must be an integer (milliseconds)")
        if value < 0:
            raise ConfigError(f"{name} must not be negative, got {value}")
        return value

    if name == "force_update":
        if not isinstance(value, bool):
            raise ConfigError("force_update must be true or false")
        return value

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{name} must be a non-empty string")
    return value


def load_settings(
    config_path: Path | None = None,
    logger: Logger | None = None,
) -> SkipCheckSettings:
    """
    Build effective settings from defaults and an optional YAML file.

    Args:
      config_path: YAML settings file. None means "use defaults".
      logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
      SkipCheckSettings with file values applied over the defaults.

    Raises:
      ConfigError: If the file cannot be loaded or contains invalid values.

    Example:
      >>> settings = load_settings(Path("updateskip.yaml"))
      >>> settings.status_path
      PosixPath('/home/me/.m2/mercedes.properties')
    """
    if logger is None:
        logger = get_global_logger()

    settings = SkipCheckSettings()
    if config_path is None:
        logger.debug("CONFIG", f"Using default settings (root {settings.m2_root})")
        return settings

    data = _load_yaml_file(config_path)
    if data is None:
        logger.debug("CONFIG", f"Settings file is empty: {config_path}")
        return settings
    if not isinstance(data, dict):
        raise ConfigError(f"settings file must contain a mapping: {config_path}")

    known = {f.name for f in fields(SkipCheckSettings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(
            f"Unknown settings in {config_path}: {', '.join(unknown)}"
        )

    overrides = {name: _coerce(name, value) for name, value in data.items()}
    logger.debug(
        "CONFIG", f"Loaded {len(overrides)} setting(s) from {config_path}"
    )
    return replace(settings, **overrides)
