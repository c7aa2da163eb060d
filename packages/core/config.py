"""Environment and path configuration for ClipRender.

Provides centralized configuration with sensible defaults.
All configuration is loaded from environment variables.

Usage:
    from packages.core import get_config

    config = get_config()
    print(f"Renders directory: {config.renders_dir}")
    print(f"Environment: {config.env}")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from .errors import ConfigurationError


class Environment(Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ClipRenderConfig:
    """Application configuration.

    Immutable configuration object created from environment variables.

    Attributes:
        data_dir: Base data directory
        renders_dir: Directory rendered MP4 artifacts are written to
        env: Current environment (development/production/testing)
        log_level: Logging level
        debug: Debug mode enabled
        fps: Output frame rate of every render
        progress_interval_ms: Sampling interval of progress streams
        job_ttl_seconds: How long settled jobs are retained
        max_workers: Size of the render worker pool
        snap_threshold: Default snap distance in clip units
        api_host: API server host
        api_port: API server port
        cors_origins: Allowed CORS origins
    """

    # Core paths
    data_dir: Path
    renders_dir: Path

    # Environment
    env: Environment
    log_level: LogLevel
    debug: bool

    # Render settings
    fps: int
    progress_interval_ms: int
    job_ttl_seconds: int
    max_workers: int
    snap_threshold: float

    # API settings
    api_host: str
    api_port: int
    cors_origins: tuple[str, ...]

    def __post_init__(self) -> None:
        """Ensure directories exist in non-testing environments."""
        if self.env != Environment.TESTING:
            for path in [self.data_dir, self.renders_dir]:
                path.mkdir(parents=True, exist_ok=True)

    @property
    def progress_interval(self) -> float:
        """Progress sampling interval in seconds."""
        return self.progress_interval_ms / 1000

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.env == Environment.TESTING


def _find_project_root() -> Path:
    """Find project root by looking for packages/ directory.

    Walks up from the current file's location to find the project root.
    Falls back to current working directory if not found.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "packages").exists():
            return parent
    return Path.cwd()


def _get_env_path(var: str, default: Path) -> Path:
    """Get path from environment variable or use default.

    Relative paths are resolved against the project root.
    """
    value = os.environ.get(var)
    if value:
        path = Path(value)
        if not path.is_absolute():
            path = _find_project_root() / path
        return path
    return default


def _get_env_number(var: str, default: str, cast=int, minimum=None):
    """Read a numeric environment variable.

    Raises:
        ConfigurationError: If the value is not a number or below ``minimum``
    """
    raw = os.environ.get(var, default)
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(
            f"Invalid value for {var}: {raw!r}",
            code="invalid_config",
            details={"env_var": var, "value": raw},
        )
    if minimum is not None and value < minimum:
        raise ConfigurationError(
            f"{var} must be >= {minimum}, got {value}",
            code="invalid_config",
            details={"env_var": var, "value": raw},
        )
    return value


@lru_cache(maxsize=1)
def get_config() -> ClipRenderConfig:
    """Get the application configuration (singleton).

    Configuration is loaded from environment variables:
    - CLIPRENDER_DATA_DIR: Base data directory
    - CLIPRENDER_RENDERS_DIR: Output directory for rendered videos
    - CLIPRENDER_ENV: Environment (development/production/testing)
    - CLIPRENDER_LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)
    - CLIPRENDER_DEBUG: Enable debug mode (1/true/yes)
    - CLIPRENDER_FPS: Render frame rate (default: 30)
    - CLIPRENDER_PROGRESS_INTERVAL_MS: Progress stream interval (default: 500)
    - CLIPRENDER_JOB_TTL_SECONDS: Retention of settled jobs (default: 3600)
    - CLIPRENDER_MAX_WORKERS: Concurrent renders (default: 2)
    - CLIPRENDER_SNAP_THRESHOLD: Snap distance in clip units (default: 0.3)
    - API_HOST: API server host (default: 0.0.0.0)
    - API_PORT: API server port (default: 8000)
    - API_CORS_ORIGINS: Comma-separated CORS origins (default: *)

    Returns:
        Immutable ClipRenderConfig instance
    """
    project_root = _find_project_root()

    env_str = os.environ.get("CLIPRENDER_ENV", "development").lower()
    try:
        env = Environment(env_str)
    except ValueError:
        env = Environment.DEVELOPMENT

    log_str = os.environ.get("CLIPRENDER_LOG_LEVEL", "INFO").upper()
    try:
        log_level = LogLevel(log_str)
    except ValueError:
        log_level = LogLevel.INFO

    debug_str = os.environ.get("CLIPRENDER_DEBUG", "").lower()
    debug = debug_str in ("1", "true", "yes") or env == Environment.DEVELOPMENT

    # Paths
    data_dir = _get_env_path("CLIPRENDER_DATA_DIR", project_root / "data")
    renders_dir = _get_env_path("CLIPRENDER_RENDERS_DIR", data_dir / "renders")

    # Render settings
    fps = _get_env_number("CLIPRENDER_FPS", "30", minimum=1)
    progress_interval_ms = _get_env_number(
        "CLIPRENDER_PROGRESS_INTERVAL_MS", "500", minimum=10
    )
    job_ttl_seconds = _get_env_number("CLIPRENDER_JOB_TTL_SECONDS", "3600", minimum=0)
    max_workers = _get_env_number("CLIPRENDER_MAX_WORKERS", "2", minimum=1)
    snap_threshold = _get_env_number(
        "CLIPRENDER_SNAP_THRESHOLD", "0.3", cast=float, minimum=0.0
    )

    # API settings
    api_host = os.environ.get("API_HOST", "0.0.0.0")
    api_port = _get_env_number("API_PORT", "8000", minimum=1)
    cors_str = os.environ.get("API_CORS_ORIGINS", "*")
    cors_origins = tuple(s.strip() for s in cors_str.split(",") if s.strip())

    return ClipRenderConfig(
        data_dir=data_dir,
        renders_dir=renders_dir,
        env=env,
        log_level=log_level,
        debug=debug,
        fps=fps,
        progress_interval_ms=progress_interval_ms,
        job_ttl_seconds=job_ttl_seconds,
        max_workers=max_workers,
        snap_threshold=snap_threshold,
        api_host=api_host,
        api_port=api_port,
        cors_origins=cors_origins,
    )


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing when environment variables change
    between test cases.
    """
    get_config.cache_clear()
