"""
Language label normalization.

Labels arrive as full names, abbreviations, mixed case or with version
suffixes ("Python3", "C++ 17", "GNU G++20") depending on which selector
produced them. Normalization runs two phases:

1. Substring heuristics over a fixed priority order. More specific names
   are checked first so "javascript" never resolves to "java".
2. Alias lookup on the token with whitespace and punctuation stripped.

Anything still unresolved is returned as its stripped token, or "unknown"
when nothing is left.
"""
import re
from typing import Callable, List, Optional, Tuple

from codesync.models.artifact import UNKNOWN_LANGUAGE

# Ordered (matcher, canonical) pairs. First matcher that accepts wins.
SUBSTRING_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (lambda s: "python" in s or "pypy" in s, "python"),
    (lambda s: "javascript" in s or s == "js", "javascript"),
    (lambda s: "typescript" in s or s == "ts", "typescript"),
    (lambda s: "java" in s and "javascript" not in s, "java"),
    (lambda s: "c++" in s or "g++" in s or "cpp" in s or "cplusplus" in s, "cpp"),
    (lambda s: s == "c" or (" c " in f"{s} " and "c++" not in s and "c#" not in s), "c"),
    (lambda s: "c#" in s or "csharp" in s, "csharp"),
    (lambda s: "golang" in s or re.search(r"\bgo\b", s) is not None, "go"),
    (lambda s: "rust" in s, "rust"),
    (lambda s: "ruby" in s, "ruby"),
    (lambda s: "swift" in s, "swift"),
    (lambda s: "kotlin" in s, "kotlin"),
    (lambda s: "scala" in s, "scala"),
    (lambda s: "php" in s, "php"),
    (lambda s: "sql" in s, "sql"),
    (lambda s: "bash" in s or "shell" in s, "bash"),
]

LANGUAGE_ALIASES = {
    "python": "python",
    "python3": "python",
    "py": "python",
    "javascript": "javascript",
    "js": "javascript",
    "typescript": "typescript",
    "ts": "typescript",
    "java": "java",
    "cpp": "cpp",
    "cplusplus": "cpp",
    "c": "c",
    "csharp": "csharp",
    "cs": "csharp",
    "go": "go",
    "golang": "go",
    "rust": "rust",
    "rs": "rust",
    "ruby": "ruby",
    "rb": "ruby",
    "swift": "swift",
    "kotlin": "kotlin",
    "kt": "kotlin",
    "scala": "scala",
    "php": "php",
    "sql": "sql",
    "mysql": "sql",
    "bash": "bash",
    "shell": "bash",
    "sh": "bash",
}


def strip_token(raw: str) -> str:
    """Lowercase and drop whitespace and non-alphanumerics."""
    return re.sub(r"[^a-z0-9]", "", raw.lower())


def normalize_language(raw: Optional[str]) -> str:
    """Map an observed language label to its canonical identifier."""
    if not raw:
        return UNKNOWN_LANGUAGE

    lowered = raw.lower().strip()
    if not lowered or lowered == UNKNOWN_LANGUAGE:
        return UNKNOWN_LANGUAGE

    for matches, canonical in SUBSTRING_RULES:
        if matches(lowered):
            return canonical

    token = strip_token(lowered)
    return LANGUAGE_ALIASES.get(token) or token or UNKNOWN_LANGUAGE
