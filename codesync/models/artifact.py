"""
Artifact model for CodeSync.
An Artifact is the problem + solution record recovered from one page visit.
It is built by exactly one platform extractor and consumed by the formatter.
"""
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_TITLE = "Unknown Problem"
UNKNOWN_LANGUAGE = "unknown"


class Platform(str, Enum):
    """Coding platform an artifact was extracted from."""
    LEETCODE = "leetcode"
    GEEKSFORGEEKS = "geeksforgeeks"
    CODEFORCES = "codeforces"
    HACKERRANK = "hackerrank"
    UNKNOWN = "unknown"
    
    @property
    def display_name(self) -> str:
        return PLATFORM_DISPLAY_NAMES.get(self, "Unsupported Platform")
    
    @property
    def host_marker(self) -> Optional[str]:
        return PLATFORM_HOSTS.get(self)


# Host substring per platform; detection walks Platform in declaration order
PLATFORM_HOSTS = {
    Platform.LEETCODE: "leetcode.com",
    Platform.GEEKSFORGEEKS: "geeksforgeeks.org",
    Platform.CODEFORCES: "codeforces.com",
    Platform.HACKERRANK: "hackerrank.com",
}

PLATFORM_DISPLAY_NAMES = {
    Platform.LEETCODE: "LeetCode",
    Platform.GEEKSFORGEEKS: "GeeksforGeeks",
    Platform.CODEFORCES: "Codeforces",
    Platform.HACKERRANK: "HackerRank",
}


class Artifact(BaseModel):
    """
    Extracted problem + solution record.
    
    This is the contract between the platform extractors, the execution
    bridge and the formatter. Field aliases match the wire format used by
    the page-context messages and sync requests.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)
    
    platform: Platform
    title: str = UNKNOWN_TITLE
    problem_number: str = Field(default="", alias="problemNumber")
    description: str = ""
    code: str = ""
    language: str = UNKNOWN_LANGUAGE
    url: str = ""
    
    def get_present_fields(self) -> List[str]:
        """Return list of fields that carry extracted data."""
        present = ["platform", "url"]
        if self.title and self.title != UNKNOWN_TITLE:
            present.append("title")
        if self.problem_number:
            present.append("problem_number")
        if self.description:
            present.append("description")
        if self.code:
            present.append("code")
        if self.language and self.language != UNKNOWN_LANGUAGE:
            present.append("language")
        return present
    
    def get_missing_fields(self) -> List[str]:
        """Return list of fields that fell back to their defaults."""
        all_fields = ["title", "problem_number", "description", "code", "language"]
        present = self.get_present_fields()
        return [f for f in all_fields if f not in present]
    
    def to_message(self) -> dict:
        """Serialize with wire aliases (problemNumber)."""
        return self.model_dump(mode="json", by_alias=True)


class GitHubConfig(BaseModel):
    """
    GitHub capability bundle supplied by the configuration collaborator.
    Never mutated by the sync engine.
    """
    model_config = ConfigDict(frozen=True)
    
    token: Optional[str] = None
    username: Optional[str] = None
    repo: Optional[str] = None
    
    def missing_fields(self) -> List[str]:
        """Return the names of empty fields."""
        return [name for name in ("token", "username", "repo") if not getattr(self, name)]
    
    def is_complete(self) -> bool:
        return not self.missing_fields()


class FormattedArtifact(BaseModel):
    """File path and text content derived from an Artifact."""
    path: str
    content: str
    extension: str
    comment_token: str


class SyncResult(BaseModel):
    """Outcome of a successful remote write."""
    message: str
    url: Optional[str] = None
    path: str
