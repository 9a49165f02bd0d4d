"""
Error taxonomy for CodeSync.

Only conditions that stop the user-visible action are raised. Expected
absence of data (a selector that no longer matches, a file that does not
exist yet) is recovered where it happens and never reaches these types.
"""
from typing import List, Optional


class CodeSyncError(Exception):
    """Base class for errors surfaced to the invoking UI."""
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ExtractionUnavailableError(CodeSyncError):
    """Page context did not answer and no local extractor is registered."""


class ConfigurationError(CodeSyncError):
    """GitHub settings are incomplete. Raised before any network call."""
    
    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class RemoteStoreError(CodeSyncError):
    """The remote store rejected the write."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NoArtifactError(CodeSyncError):
    """Extraction ran but the page yielded no artifact."""


class BrowserUnavailableError(CodeSyncError):
    """The headless browser could not be started or could not load the page."""
