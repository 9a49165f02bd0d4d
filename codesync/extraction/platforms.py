"""
Platform extractors for the supported coding-practice sites.

Each platform is described by a PlatformRecipe: ordered probe lists for
title, description, language and code. A single PlatformExtractor walks any
recipe, so adding or repairing a selector is a data change. Dispatch is a
plain lookup from Platform to extractor; the host address picks the entry.

Extraction never raises past this module. A page whose layout broke the
recipe yields an Artifact full of fallbacks, and an unexpected failure
yields None.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from urllib.parse import urlparse

from codesync.extraction.cascade import (
    Probe,
    control_label,
    each,
    editor_model,
    first_hit,
    known_text,
    labelled_known_text,
    line_join,
    query_param,
    select_attribute,
    select_inner_text,
    select_raw_text,
    select_text,
    select_value,
    substantial_text,
    textarea_scan,
)
from codesync.extraction.document import PageDocument
from codesync.extraction.language import normalize_language
from codesync.models.artifact import (
    UNKNOWN_LANGUAGE,
    UNKNOWN_TITLE,
    Artifact,
    Platform,
)
from codesync.utils.logger import LayerLogger

logger = LayerLogger("platform_extractor")

LEETCODE_LANGUAGES = [
    "C++", "Java", "Python", "Python3", "C", "C#", "JavaScript", "TypeScript",
    "PHP", "Swift", "Kotlin", "Dart", "Go", "Ruby", "Scala", "Rust", "Racket",
    "Erlang", "Elixir", "Pandas", "React",
]

COMMON_LANGUAGES = [
    "C++", "Java", "Python", "Python3", "C", "C#", "JavaScript", "TypeScript",
    "PHP", "Swift", "Kotlin", "Dart", "Go", "Ruby", "Scala", "Rust",
]

# Older GfG toolbars print "Language: <name>"; checked by substring
GFG_TOOLBAR_LANGUAGES = ["C++", "Java", "Python", "Python 3", "C", "C#", "JavaScript"]

DROPDOWN_ITEMS = ".dropdown-text, .ui.selection.dropdown, select, [role='listbox'], button"


def detect_platform(url: str) -> Platform:
    """Pick the platform whose host marker appears in the address host."""
    hostname = (urlparse(url).hostname or "").lower()
    for platform in Platform:
        marker = platform.host_marker
        if marker and marker in hostname:
            return platform
    return Platform.UNKNOWN


def leading_number(title: str) -> str:
    """Numeric prefix of titles like "1. Two Sum"."""
    match = re.match(r"^(\d+)\.", title)
    return match.group(1) if match else ""


def no_number(title: str) -> str:
    return ""


def first_line(text: str) -> str:
    return text.split("\n")[0].strip()


def last_segment(mode_id: str) -> str:
    return mode_id.split("/")[-1] or mode_id


@dataclass
class PlatformRecipe:
    """Ordered probes for every artifact field of one platform."""
    platform: Platform
    title: List[Probe]
    description: List[Probe]
    language: List[Probe]
    code: List[Probe]
    problem_number: Callable[[str], str] = no_number


def monaco_code_probes(min_length: int = 0) -> List[Probe]:
    """Editor model first, then rendered view lines, then Monaco's textarea."""
    return [
        editor_model(min_length=min_length),
        line_join(".monaco-editor", ".view-line"),
        select_value(".monaco-editor textarea"),
    ]


LEETCODE = PlatformRecipe(
    platform=Platform.LEETCODE,
    title=each(select_text, [
        '[data-cy="question-title"]',
        'div[class*="title"]',
        "h3",
    ]),
    description=each(select_inner_text, [
        '[data-cy="description"]',
        ".question-content__JfgR",
        '[class*="description"]',
    ]),
    language=[
        *each(control_label, [
            '[data-cy="lang-select"]',
            'button[class*="language"]',
            'div[class*="lang-select"]',
            'select[class*="language"]',
        ]),
        select_attribute(".monaco-editor", "data-mode-id", "data-lang", transform=last_segment),
        select_attribute('[class*="editor"]', "data-language", "data-lang"),
        known_text(
            'button, div[role="button"], span',
            LEETCODE_LANGUAGES,
            containers='div[class*="flex"], div[class*="toolbar"]',
        ),
        known_text("button", LEETCODE_LANGUAGES),
    ],
    code=[
        *monaco_code_probes(),
        select_value('textarea[class*="input"]'),
        select_value('textarea[class*="code"]'),
        select_inner_text(".CodeMirror-code"),
        select_raw_text("pre code"),
        select_raw_text('pre[class*="code"]'),
    ],
    problem_number=leading_number,
)

GEEKSFORGEEKS = PlatformRecipe(
    platform=Platform.GEEKSFORGEEKS,
    title=each(select_text, [
        ".gfg-article-title",
        '[class*="problems_header_content_title"]',
        '[class*="problem-title"]',
        "h3",
    ]),
    description=each(select_inner_text, [
        ".problem-statement",
        '[class*="problems_description__"]',
        ".content",
        "article",
    ]),
    language=[
        select_inner_text('[class*="problems_language_dropdown__"]', transform=first_line),
        *each(select_text, [
            ".active-language",
            ".language-active",
            ".gfg-dropdown-active",
        ]),
        labelled_known_text(".editor-toolbar, .divider, .pull-right", GFG_TOOLBAR_LANGUAGES),
        known_text(
            DROPDOWN_ITEMS,
            COMMON_LANGUAGES,
            scope=(".problem-editor", '[class*="problems_right_section__"]'),
        ),
    ],
    code=[
        *monaco_code_probes(),
        line_join(None, ".ace_line"),
        # The editor is usually the last CodeMirror instance on the page
        select_inner_text(".CodeMirror-code", pick="last"),
        textarea_scan(min_length=20, exclude_class="comment"),
        select_raw_text("pre code"),
        select_raw_text("pre"),
    ],
)

CODEFORCES = PlatformRecipe(
    platform=Platform.CODEFORCES,
    title=each(select_text, [
        ".title",
        "h2",
        '[class*="problem-title"]',
    ]),
    description=each(select_inner_text, [
        ".problem-statement",
        ".ttypography",
    ]),
    language=each(control_label, [
        'select[name="programTypeId"]',
        '[name="language"]',
        '[class*="language"]',
        "option[selected]",
    ]),
    code=[
        select_raw_text("pre.program-source"),
        select_value("textarea#sourceCodeTextarea"),
        select_value('textarea[name="source"]'),
        select_value("textarea"),
        select_raw_text("pre code"),
        select_raw_text("pre"),
        select_raw_text("code"),
    ],
)

HACKERRANK = PlatformRecipe(
    platform=Platform.HACKERRANK,
    title=each(select_text, [
        ".challenge-title",
        "h1",
        '[class*="title"]',
        ".ui-icon-label",
    ]),
    description=[
        substantial_text([
            ".challenge-body",
            ".challenge-text",
            ".challenge-description",
            '[class*="description"]',
            ".problem-statement",
            ".challenge-problem-statement",
            ".problem-description",
        ], min_length=50),
    ],
    language=[
        *[control_label(selector, selects_only=True) for selector in (
            'select[data-attr1="language"]',
            'select[class*="lang"]',
            'select[name="language"]',
            ".select-wrapper select",
        )],
        *each(control_label, [
            '[class*="language"]',
            '[class*="lang-select"]',
            'button[class*="lang"]',
            ".ui-selectmenu-text",
        ]),
        query_param("language", "lang"),
        known_text(DROPDOWN_ITEMS + ", span", COMMON_LANGUAGES, scope=(".editor-wrapper",)),
    ],
    code=[
        # Challenge pages can host several editors; prefer one with real content
        *monaco_code_probes(min_length=10),
        line_join(".CodeMirror-code", ".CodeMirror-line", rstrip=False),
        select_inner_text(".CodeMirror-code"),
        line_join(None, ".ace_line"),
        select_value(".CodeMirror textarea"),
        select_value('textarea[class*="code"]'),
        select_value('textarea[name="code"]'),
        select_value("textarea"),
        select_raw_text("pre code"),
        select_raw_text('pre[class*="code"]'),
        select_raw_text("pre"),
    ],
)


class PlatformExtractor:
    """Runs one platform's recipe over a document and builds an Artifact."""

    def __init__(self, recipe: PlatformRecipe):
        self.recipe = recipe

    def __call__(self, document: PageDocument) -> Optional[Artifact]:
        platform = self.recipe.platform.value
        try:
            title = self._resolve("title", self.recipe.title, document)
            title = title.strip() if title else UNKNOWN_TITLE

            description = self._resolve("description", self.recipe.description, document) or ""

            raw_language = self._resolve("language", self.recipe.language, document)
            language = normalize_language(raw_language or UNKNOWN_LANGUAGE)

            code = self._resolve("code", self.recipe.code, document) or ""

            artifact = Artifact(
                platform=self.recipe.platform,
                title=title,
                problem_number=self.recipe.problem_number(title),
                description=description,
                code=code.strip(),
                language=language,
                url=document.url,
            )
        except Exception as e:
            logger.log_error(
                f"Error extracting {platform} data: {e}",
                error_type="extraction_failed",
                platform=platform,
                url=document.url,
            )
            return None

        logger.log_extraction(
            platform=platform,
            fields_present=artifact.get_present_fields(),
            fields_missing=artifact.get_missing_fields(),
            live_state=document.has_live_state,
            url=document.url,
        )
        return artifact

    def _resolve(self, field_name: str, probes: List[Probe], document: PageDocument) -> Optional[str]:
        hit = first_hit(probes, document)
        if hit is None:
            logger.log_fallback(
                from_source=f"{field_name}_cascade",
                to_source="default",
                reason="no probe matched",
                platform=self.recipe.platform.value,
            )
            return None
        value, probe_name = hit
        logger.log_decision(
            decision=f"{field_name}_resolved",
            reason=probe_name,
            platform=self.recipe.platform.value,
        )
        return value


def _no_extraction(document: PageDocument) -> Optional[Artifact]:
    logger.log_decision(
        decision="skip_extraction",
        reason="unsupported platform",
        url=document.url,
    )
    return None


RECIPES: Dict[Platform, PlatformRecipe] = {
    recipe.platform: recipe
    for recipe in (LEETCODE, GEEKSFORGEEKS, CODEFORCES, HACKERRANK)
}

EXTRACTORS: Dict[Platform, Callable[[PageDocument], Optional[Artifact]]] = {
    **{platform: PlatformExtractor(recipe) for platform, recipe in RECIPES.items()},
    Platform.UNKNOWN: _no_extraction,
}


def extract(document: PageDocument) -> Optional[Artifact]:
    """Extract an Artifact from a page, or None when nothing can be extracted."""
    platform = detect_platform(document.url)
    return EXTRACTORS[platform](document)
