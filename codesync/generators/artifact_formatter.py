"""
Artifact Formatter for CodeSync.
Generates a deterministic file path and file content from an Artifact.
"""
import re
from typing import Optional

from codesync.extraction.language import strip_token
from codesync.models.artifact import Artifact, FormattedArtifact
from codesync.utils.logger import LayerLogger

DEFAULT_EXTENSION = "txt"
DEFAULT_COMMENT = "//"
DEFAULT_TITLE = "Problem"

EXTENSION_MAP = {
    "python": "py",
    "python3": "py",
    "javascript": "js",
    "typescript": "ts",
    "java": "java",
    "cpp": "cpp",
    "c++": "cpp",
    "c": "c",
    "csharp": "cs",
    "c#": "cs",
    "go": "go",
    "golang": "go",
    "rust": "rs",
    "ruby": "rb",
    "swift": "swift",
    "kotlin": "kt",
    "scala": "scala",
    "php": "php",
    "sql": "sql",
    "mysql": "sql",
    "bash": "sh",
    "shell": "sh",
    "sh": "sh",
    "pandas": "py",
    "react": "jsx",
    "unknown": DEFAULT_EXTENSION,
}

# Single-line comment token per extension
COMMENT_STYLE = {
    "js": "//",
    "jsx": "//",
    "ts": "//",
    "java": "//",
    "cpp": "//",
    "c": "//",
    "cs": "//",
    "go": "//",
    "rs": "//",
    "swift": "//",
    "kt": "//",
    "scala": "//",
    "php": "//",
    "py": "#",
    "rb": "#",
    "sh": "#",
    "sql": "--",
    "txt": "//",
}


def resolve_extension(language: Optional[str]) -> str:
    """File extension for a language label; generic text when unknown."""
    if not language:
        return DEFAULT_EXTENSION
    return (
        EXTENSION_MAP.get(language.lower())
        or EXTENSION_MAP.get(strip_token(language))
        or DEFAULT_EXTENSION
    )


def comment_token(extension: str) -> str:
    return COMMENT_STYLE.get(extension, DEFAULT_COMMENT)


def sanitize_title(title: Optional[str], problem_number: str = "") -> str:
    """
    File-name-safe title.

    Strips a leading "<number><separator>" that repeats problem_number,
    keeps letters, digits, hyphens and spaces, and joins words with "_".
    Titles that start with digits on their own ("3Sum") are left intact.
    """
    if not title:
        return DEFAULT_TITLE

    clean = title.strip()

    if problem_number:
        number = re.escape(problem_number)
        clean = re.sub(rf"^\s*{number}\s*\.?\s+", "", clean, flags=re.I)
        clean = re.sub(rf"^\s*{number}\.\s*", "", clean, flags=re.I)
        clean = re.sub(rf"^\s*{number}[^a-zA-Z]+", "", clean, flags=re.I)

    clean = clean.strip()
    if not clean:
        return DEFAULT_TITLE

    clean = re.sub(r"[^a-zA-Z0-9\s-]", "", clean).strip()
    clean = re.sub(r"\s+", "_", clean)

    return clean or DEFAULT_TITLE


def clean_description(description: Optional[str]) -> str:
    """Drop blank lines and trailing whitespace."""
    if not description or not description.strip():
        return ""
    lines = [line.rstrip() for line in description.split("\n")]
    return "\n".join(line for line in lines if line)


class ArtifactFormatter:
    """
    Deterministic file generator.

    Principles:
    - Same Artifact in, same path and content out
    - Never fails: unknown languages degrade to .txt with "//" comments
    - One directory per platform, flat inside it
    """

    def __init__(self):
        self.logger = LayerLogger("artifact_formatter")

    def format(self, artifact: Artifact) -> FormattedArtifact:
        extension = resolve_extension(artifact.language)
        token = comment_token(extension)
        path = self.build_path(artifact, extension)
        content = self.build_content(artifact, token)

        self.logger.log_action(
            "format_artifact",
            "completed",
            path=path,
            extension=extension,
            content_length=len(content),
        )

        return FormattedArtifact(
            path=path,
            content=content,
            extension=extension,
            comment_token=token,
        )

    def build_filename(self, artifact: Artifact, extension: str) -> str:
        number = artifact.problem_number or ""
        title = sanitize_title(artifact.title, number)
        if number:
            return f"{number}_{title}.{extension}"
        return f"{title}.{extension}"

    def build_path(self, artifact: Artifact, extension: str) -> str:
        platform = artifact.platform.value
        return f"{platform}/{self.build_filename(artifact, extension)}"

    def build_content(self, artifact: Artifact, token: str) -> str:
        """Comment header (URL, problem, description), then the code verbatim."""
        lines = [
            f"{token} URL: {artifact.url}",
            f"{token} Problem: {artifact.title}",
        ]

        description = clean_description(artifact.description)
        if description:
            lines.append(token)
            lines.extend(f"{token} {line}" for line in description.split("\n"))

        lines.append("")
        lines.append(f"{token} Solution:")

        return "\n".join(lines) + "\n" + artifact.code
