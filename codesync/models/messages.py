"""
Request/response envelopes exchanged with the UI collaborator.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from codesync.models.artifact import Artifact, GitHubConfig, SyncResult


class SyncRequest(BaseModel):
    """Sync request: {problemData, githubConfig}."""
    model_config = ConfigDict(populate_by_name=True)
    
    problem_data: Artifact = Field(alias="problemData")
    github_config: GitHubConfig = Field(default_factory=GitHubConfig, alias="githubConfig")


class SyncResponse(BaseModel):
    """Sync reply: {success, result?, error?}."""
    success: bool
    result: Optional[SyncResult] = None
    error: Optional[str] = None


class ExtractRequest(BaseModel):
    """Page snapshot posted for extraction."""
    url: str
    html: str
    editor_values: List[str] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    """Extraction reply: {success, data, error?}."""
    success: bool
    data: Optional[Artifact] = None
    error: Optional[str] = None


class CaptureRequest(BaseModel):
    """Capture-and-sync request for a live page."""
    model_config = ConfigDict(populate_by_name=True)
    
    url: str
    github_config: GitHubConfig = Field(default_factory=GitHubConfig, alias="githubConfig")
    use_browser: bool = True


class CaptureResponse(BaseModel):
    """Capture-and-sync reply."""
    success: bool
    data: Optional[Artifact] = None
    result: Optional[SyncResult] = None
    error: Optional[str] = None
