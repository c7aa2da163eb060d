"""Core package - shared utilities, types, and configuration.

This package provides common functionality used across all ClipRender packages:
- Configuration management
- Logging setup
- Shared type definitions
- Protocol interfaces
- Custom exceptions
- Utility functions

Example usage:
    from packages.core import get_config, JobStatus, JobNotFoundError

    config = get_config()
    print(f"Renders directory: {config.renders_dir}")

    if job is None:
        raise JobNotFoundError(job_id)
"""

# Configuration
from .config import (
    ClipRenderConfig,
    Environment,
    LogLevel,
    clear_config_cache,
    get_config,
)
from .logging_setup import configure_logging

# Types
from .types import (
    Aspect,
    Clip,
    FrameRange,
    JobStatus,
    Overlay,
    RenderJob,
    RenderRequest,
    SourceClip,
)

# Protocols
from .protocols import (
    AssetLookup,
    ProgressCallback,
    Renderer,
)

# Errors
from .errors import (
    ArtifactNotFoundError,
    ClipLoadError,
    ClipRenderError,
    ConfigurationError,
    ExportError,
    InputError,
    JobNotFoundError,
    MissingConfigError,
    NotFoundError,
    OverlayLimitError,
    RenderError,
    RenderFailedError,
    RendererUnavailableError,
    TimelineValidationError,
)

# Utilities
from .utils import (
    artifact_filename,
    clamp,
    ensure_dir,
    format_duration,
    round_half_up,
)

__all__ = [
    # Config
    "ClipRenderConfig",
    "Environment",
    "LogLevel",
    "get_config",
    "clear_config_cache",
    "configure_logging",
    # Types
    "Aspect",
    "Clip",
    "FrameRange",
    "JobStatus",
    "Overlay",
    "RenderJob",
    "RenderRequest",
    "SourceClip",
    # Protocols
    "AssetLookup",
    "ProgressCallback",
    "Renderer",
    # Errors
    "ClipRenderError",
    "ConfigurationError",
    "MissingConfigError",
    "InputError",
    "TimelineValidationError",
    "OverlayLimitError",
    "NotFoundError",
    "JobNotFoundError",
    "ArtifactNotFoundError",
    "RenderError",
    "RenderFailedError",
    "RendererUnavailableError",
    "ClipLoadError",
    "ExportError",
    # Utilities
    "artifact_filename",
    "clamp",
    "ensure_dir",
    "format_duration",
    "round_half_up",
]
