"""Environment variable loading helpers.

The plugin is configured through PLUGIN_* environment variables set by the CI
runner. For local runs the same variables can live in dotenv-style files.

Load order (first found wins; existing process env vars are never overridden):
- .env
- .env.dev (only when PLUGIN_ENV=dev)
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


def _should_load_dev_env() -> bool:
    return os.environ.get("PLUGIN_ENV", "").lower() in {"dev", "development", "local"}


def load_env(base_dir: Path | None = None) -> None:
    """Load .env files into process environment.

    Safe to call multiple times.

    Args:
        base_dir: Project root directory. Defaults to config/..
    """

    if base_dir is None:
        base_dir = Path(__file__).resolve().parent.parent

    env_path = base_dir / ".env"
    load_dotenv(env_path, override=False)

    if _should_load_dev_env():
        dev_env_path = base_dir / ".env.dev"
        load_dotenv(dev_env_path, override=False)


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag such as PLUGIN_RESOLVE_INCIDENT=true."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    try:
        return int(value) if value else default
    except ValueError:
        return default


# PLUGIN_LOG_LEVEL value -> logging level name
LOG_LEVELS = {
    "trace": "DEBUG",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
}


def env_log_level(name: str, default: str = "INFO") -> str:
    """Map a level such as PLUGIN_LOG_LEVEL=trace onto a logging level name."""
    value = os.environ.get(name, "").strip().lower()
    return LOG_LEVELS.get(value, default)
