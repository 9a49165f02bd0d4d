"""Generators package initialization."""
from codesync.generators.artifact_formatter import ArtifactFormatter

__all__ = ["ArtifactFormatter"]
