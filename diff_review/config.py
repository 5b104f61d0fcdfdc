"""
Configuration — loads settings from .diff_review.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import os

import yaml


_DEFAULTS = {
    "authority_url": "http://127.0.0.1:8080",
    "connect_timeout": 10.0,
    "read_timeout": 60.0,
    "close_delay": 3.0,
    "log_dir": ".diff_review/logs",
}

# Config file search locations
_CONFIG_FILENAMES = [".diff_review.yaml", ".diff_review.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    # Search CWD first, then home directory
    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


class Config:
    """Review client configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .diff_review.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return cast(env_val)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return cast(yaml_val)
            return default

        self.AUTHORITY_URL = _get("DIFF_REVIEW_URL", "authority_url",
                                  _DEFAULTS["authority_url"])

        # Outstanding requests never hang forever: (connect, read) seconds
        self.CONNECT_TIMEOUT = _get("DIFF_REVIEW_CONNECT_TIMEOUT",
                                    "connect_timeout",
                                    _DEFAULTS["connect_timeout"], cast=float)
        self.READ_TIMEOUT = _get("DIFF_REVIEW_READ_TIMEOUT", "read_timeout",
                                 _DEFAULTS["read_timeout"], cast=float)

        # Seconds the UI stays up after completion
        self.CLOSE_DELAY = _get("DIFF_REVIEW_CLOSE_DELAY", "close_delay",
                                _DEFAULTS["close_delay"], cast=float)

        self.LOG_DIR = _get("DIFF_REVIEW_LOG_DIR", "log_dir",
                            _DEFAULTS["log_dir"])

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
