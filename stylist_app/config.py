"""Configuration helpers for the outfit recommendation engine."""

from dataclasses import dataclass
from pathlib import Path
import logging
import os
from typing import Optional

from logic.contextual_filtering import FilterMode

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_COMBINATIONS = 50
DEFAULT_CACHE_TTL_SECONDS = 600.0
DEFAULT_CACHE_MAX_ENTRIES = 128


@dataclass
class EngineConfig:
    """Configuration values for the recommendation engine.

    Defaults suit a single local process; deployments override them through
    environment variables or an environment YAML file.
    """

    max_combinations: int = DEFAULT_MAX_COMBINATIONS
    filter_mode: FilterMode = FilterMode.HARD
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES
    scoring_workers: int = 1
    preference_store_path: Optional[str] = None
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is overridden key by key by upper-cased environment
        variables.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("APP_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        raw_mode = get_value("filter_mode", FilterMode.HARD.value)
        filter_mode = FilterMode.parse(raw_mode)
        if filter_mode.value != str(raw_mode).strip().lower():
            LOGGER.warning("Unknown filter_mode '%s', using '%s'", raw_mode, filter_mode.value)

        return cls(
            max_combinations=cls._as_int("max_combinations", get_value("max_combinations"), DEFAULT_MAX_COMBINATIONS),
            filter_mode=filter_mode,
            cache_ttl_seconds=cls._as_float(
                "cache_ttl_seconds", get_value("cache_ttl_seconds"), DEFAULT_CACHE_TTL_SECONDS
            ),
            cache_max_entries=cls._as_int(
                "cache_max_entries", get_value("cache_max_entries"), DEFAULT_CACHE_MAX_ENTRIES
            ),
            scoring_workers=max(1, cls._as_int("scoring_workers", get_value("scoring_workers"), 1)),
            preference_store_path=get_value("preference_store_path") or None,
            log_level=str(get_value("log_level", "INFO") or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _as_int(key: str, raw: Optional[str], default: int) -> int:
        if raw is None or raw == "":
            return default
        try:
            return int(raw)
        except (TypeError, ValueError):
            LOGGER.warning("Invalid integer for %s: '%s', using %s", key, raw, default)
            return default

    @staticmethod
    def _as_float(key: str, raw: Optional[str], default: float) -> float:
        if raw is None or raw == "":
            return default
        try:
            return float(raw)
        except (TypeError, ValueError):
            LOGGER.warning("Invalid number for %s: '%s', using %s", key, raw, default)
            return default

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
