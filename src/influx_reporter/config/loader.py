"""
Configuration Loader - Reporter Settings from YAML and Environment.

Sources, lowest precedence first:
    1. The reporter YAML file
    2. A profile file from ``profiles/<name>.yaml`` beside that file
    3. ``INFLUX_REPORTER_*`` environment variables

Credentials usually come from the environment so the YAML can be
committed without them. Blank variables are ignored.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

from influx_reporter.config.models import ReporterConfig

ENV_PREFIX = "INFLUX_REPORTER_"

# Variable suffix -> location in the config document
ENV_OVERRIDES: Dict[str, Tuple[str, ...]] = {
    "URL": ("influxdb", "url"),
    "DATABASE": ("influxdb", "database"),
    "USERNAME": ("influxdb", "username"),
    "PASSWORD": ("influxdb", "password"),
    "TIMEOUT_SECONDS": ("influxdb", "timeout_seconds"),
    "INTERVAL_SECONDS": ("interval_seconds",),
}

PROFILE_DIR = "profiles"


class ConfigLoader:
    """
    Builds a validated ReporterConfig.

    Usage:
        config = ConfigLoader().load("reporter.yaml", profile="staging")
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        env_prefix: str = ENV_PREFIX,
    ) -> None:
        """
        Initialize config loader.

        Args:
            environ: Environment to read overrides from (default: os.environ)
            env_prefix: Prefix of override variables
        """
        self._environ = os.environ if environ is None else environ
        self._env_prefix = env_prefix

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> ReporterConfig:
        """
        Load a reporter config file, its profile, and environment overrides.

        Raises:
            FileNotFoundError: If the config or profile file doesn't exist
            ValueError: If a file's top level is not a mapping
            ValidationError: If the merged config is invalid
        """
        path = Path(config_path)
        document = self._read_mapping(path)

        if profile:
            profile_path = path.parent / PROFILE_DIR / f"{profile}.yaml"
            if not profile_path.is_file():
                raise FileNotFoundError(
                    f"Profile {profile!r} not found at {profile_path}"
                )
            document = deep_merge(document, self._read_mapping(profile_path))

        return self.load_from_dict(document)

    def load_from_dict(self, document: Mapping[str, Any]) -> ReporterConfig:
        """Apply environment overrides to ``document`` and validate it."""
        return ReporterConfig.model_validate(self.apply_env(document))

    def apply_env(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``document`` with environment overrides applied."""
        result = copy.deepcopy(dict(document))
        for suffix, location in ENV_OVERRIDES.items():
            raw = self._environ.get(self._env_prefix + suffix)
            if raw is None or not raw.strip():
                continue

            section = result
            for key in location[:-1]:
                if not isinstance(section.get(key), dict):
                    section[key] = {}
                section = section[key]
            section[location[-1]] = raw.strip()
        return result

    @staticmethod
    def _read_mapping(path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return data


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``overlay`` into a copy of ``base``; nested mappings merge by key."""
    result = dict(base)
    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReporterConfig:
    """Load a ReporterConfig; see ConfigLoader.load."""
    return ConfigLoader(environ=environ).load(config_path, profile)
