"""Custom exception classes for ClipRender.

Exception Hierarchy:
    ClipRenderError (base)
    ├── ConfigurationError
    │   └── MissingConfigError
    ├── InputError
    │   ├── TimelineValidationError
    │   └── OverlayLimitError
    ├── NotFoundError
    │   ├── JobNotFoundError
    │   └── ArtifactNotFoundError
    └── RenderError
        ├── RenderFailedError
        ├── RendererUnavailableError
        ├── ClipLoadError
        └── ExportError
"""

from typing import Any, Optional


class ClipRenderError(Exception):
    """Base exception for all ClipRender errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        result: dict[str, Any] = {
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# ============ Configuration Errors ============


class ConfigurationError(ClipRenderError):
    """Error in application configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    def __init__(self, config_key: str, env_var: Optional[str] = None):
        message = f"Missing required configuration: {config_key}"
        if env_var:
            message += f" (set via {env_var})"
        super().__init__(
            message=message,
            code="missing_config",
            details={"config_key": config_key, "env_var": env_var},
        )


# ============ Input Errors ============


class InputError(ClipRenderError):
    """Malformed or out-of-range timeline submitted by a client."""

    pass


class TimelineValidationError(InputError):
    """Clip or overlay data failed validation."""

    def __init__(self, errors: list[str]):
        super().__init__(
            message=f"Invalid timeline: {'; '.join(errors)}",
            code="invalid_timeline",
            details={"validation_errors": errors},
        )
        self.validation_errors = errors


class OverlayLimitError(InputError):
    """More overlays were submitted than a render supports."""

    def __init__(self, count: int, limit: int):
        super().__init__(
            message=f"At most {limit} overlay(s) supported, got {count}",
            code="overlay_limit_exceeded",
            details={"count": count, "limit": limit},
        )
        self.count = count
        self.limit = limit


# ============ Not Found Errors ============


class NotFoundError(ClipRenderError):
    """Base class for lookups of unknown resources."""

    pass


class JobNotFoundError(NotFoundError):
    """Render job does not exist (never created or already evicted)."""

    def __init__(self, job_id: str):
        super().__init__(
            message=f"Render job '{job_id}' not found",
            code="job_not_found",
            details={"job_id": job_id},
        )
        self.job_id = job_id


class ArtifactNotFoundError(NotFoundError):
    """Render job has no downloadable artifact."""

    def __init__(self, job_id: str, reason: str):
        super().__init__(
            message=f"No video available for job '{job_id}': {reason}",
            code="artifact_not_found",
            details={"job_id": job_id, "reason": reason},
        )
        self.job_id = job_id


# ============ Render Errors ============


class RenderError(ClipRenderError):
    """Base class for errors raised while rendering."""

    pass


class RenderFailedError(RenderError):
    """Rendering a job did not produce an artifact."""

    def __init__(self, job_id: str, reason: str):
        super().__init__(
            message=f"Render of job '{job_id}' failed: {reason}",
            code="render_failed",
            details={"job_id": job_id, "reason": reason},
        )


class RendererUnavailableError(RenderError):
    """The rendering backend cannot run (e.g. ffmpeg missing)."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Renderer unavailable: {reason}",
            code="renderer_unavailable",
            details={"reason": reason},
        )


class ClipLoadError(RenderError):
    """Failed to read a source clip."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            message=f"Failed to load clip '{url}': {reason}",
            code="clip_load_error",
            details={"url": url, "reason": reason},
        )


class ExportError(RenderError):
    """Failed to encode the output video."""

    def __init__(self, output_path: str, reason: str):
        super().__init__(
            message=f"Failed to export video to '{output_path}': {reason}",
            code="export_error",
            details={"output_path": output_path, "reason": reason},
        )
