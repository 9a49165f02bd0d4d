"""Models package initialization."""
from codesync.models.artifact import (
    Artifact,
    FormattedArtifact,
    GitHubConfig,
    Platform,
    SyncResult,
    UNKNOWN_LANGUAGE,
    UNKNOWN_TITLE,
)
from codesync.models.messages import (
    CaptureRequest,
    CaptureResponse,
    ExtractRequest,
    ExtractResponse,
    SyncRequest,
    SyncResponse,
)

__all__ = [
    "Artifact",
    "FormattedArtifact",
    "GitHubConfig",
    "Platform",
    "SyncResult",
    "UNKNOWN_LANGUAGE",
    "UNKNOWN_TITLE",
    "CaptureRequest",
    "CaptureResponse",
    "ExtractRequest",
    "ExtractResponse",
    "SyncRequest",
    "SyncResponse",
]
