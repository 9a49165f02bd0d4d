"""Layers package initialization."""
from codesync.layers.bridge import ExecutionBridge, handle_extract_request, local_extractor
from codesync.layers.sync import RemoteSyncLayer, handle_sync_request, resolve_github_config
from codesync.layers.pipeline import CapturePipeline

__all__ = [
    "ExecutionBridge",
    "handle_extract_request",
    "local_extractor",
    "RemoteSyncLayer",
    "handle_sync_request",
    "resolve_github_config",
    "CapturePipeline",
]
