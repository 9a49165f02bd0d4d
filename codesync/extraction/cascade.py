"""
Selector cascade library.

A cascade is an ordered list of independent probes over a PageDocument.
Target pages are third-party and change layout without notice, so every
field is looked up through several redundant probes and the first usable
answer wins. Later probes never override an earlier success.

Probe kinds:
- structural selector match (CSS attribute / tag selectors)
- class-name substring match ([class*="..."] selectors)
- known-text membership test against a fixed list of labels
- editor-model introspection (values captured from the live page)
"""
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import parse_qs, urlparse

from bs4 import Tag

from codesync.extraction.document import (
    PageDocument,
    element_value,
    inner_text,
    selected_option,
    text_content,
)
from codesync.models.artifact import UNKNOWN_LANGUAGE


@dataclass(frozen=True)
class Probe:
    """A named lookup strategy."""
    name: str
    run: Callable[[PageDocument], Optional[str]]

    def __call__(self, document: PageDocument) -> Optional[str]:
        return self.run(document)


def is_usable(value: Optional[str]) -> bool:
    """Non-empty and not the "unknown" placeholder."""
    if value is None:
        return False
    stripped = value.strip()
    return bool(stripped) and stripped.lower() != UNKNOWN_LANGUAGE


def first_hit(probes: Iterable[Probe], document: PageDocument) -> Optional[Tuple[str, str]]:
    """Evaluate probes in order; return (value, probe name) of the first usable result."""
    for probe in probes:
        value = probe(document)
        if is_usable(value):
            return value, probe.name
    return None


def first_match(probes: Iterable[Probe], document: PageDocument) -> Optional[str]:
    """Evaluate probes in order; return the first usable value or None."""
    hit = first_hit(probes, document)
    return hit[0] if hit else None


# =============================================================================
# Probe factories
# =============================================================================

def select_text(selector: str, pick: str = "first") -> Probe:
    """Stripped textContent of the element matching selector."""
    def run(document: PageDocument) -> Optional[str]:
        element = _pick(document, selector, pick)
        return text_content(element).strip() if element is not None else None
    return Probe(f"text:{selector}", run)


def select_raw_text(selector: str) -> Probe:
    """Unstripped textContent (code blocks keep their indentation)."""
    def run(document: PageDocument) -> Optional[str]:
        element = document.select_one(selector)
        return text_content(element) if element is not None else None
    return Probe(f"raw_text:{selector}", run)


def select_inner_text(
    selector: str,
    pick: str = "first",
    transform: Optional[Callable[[str], str]] = None,
) -> Probe:
    """Rendered text (innerText) of the element matching selector."""
    def run(document: PageDocument) -> Optional[str]:
        element = _pick(document, selector, pick)
        if element is None:
            return None
        text = inner_text(element)
        return transform(text) if transform else text
    return Probe(f"inner_text:{selector}", run)


def select_value(selector: str) -> Probe:
    """Form value of the element matching selector (textarea contents etc.)."""
    def run(document: PageDocument) -> Optional[str]:
        element = document.select_one(selector)
        return element_value(element) if element is not None else None
    return Probe(f"value:{selector}", run)


def select_attribute(
    selector: str,
    *attributes: str,
    transform: Optional[Callable[[str], str]] = None,
) -> Probe:
    """First non-empty attribute of the element matching selector."""
    def run(document: PageDocument) -> Optional[str]:
        element = document.select_one(selector)
        if element is None:
            return None
        for attribute in attributes:
            value = element.get(attribute)
            if value:
                return transform(value) if transform else value
        return None
    return Probe(f"attr:{selector}[{','.join(attributes)}]", run)


def control_label(selector: str, selects_only: bool = False) -> Probe:
    """
    Label shown by a language control.

    For a <select>, the selected option's text, falling back to its value.
    For anything else, its text, then value, then data-lang.
    """
    def run(document: PageDocument) -> Optional[str]:
        element = document.select_one(selector)
        if element is None:
            return None
        if element.name == "select":
            option = selected_option(element)
            label = text_content(option).strip() if option is not None else ""
            return label or element_value(element)
        if selects_only:
            return None
        return (
            text_content(element).strip()
            or element.get("value")
            or element.get("data-lang")
        )
    return Probe(f"control:{selector}", run)


def known_text(
    item_selector: str,
    known: Sequence[str],
    containers: Optional[str] = None,
    scope: Sequence[str] = (),
) -> Probe:
    """
    First element whose exact text is one of the known labels.

    Items are searched inside every element matching containers when given,
    otherwise inside the first existing scope element, otherwise the page.
    """
    known_set = set(known)

    def run(document: PageDocument) -> Optional[str]:
        for item in _iter_items(document, item_selector, containers, scope):
            text = text_content(item).strip() or element_value(item).strip()
            if text in known_set:
                return text
        return None
    return Probe(f"known_text:{containers or ','.join(scope) or 'page'}>{item_selector}", run)


def labelled_known_text(
    bar_selector: str,
    known: Sequence[str],
    labels: Sequence[str] = ("Language", "Lang"),
) -> Probe:
    """Known label contained in a toolbar whose text also names a language field."""
    def run(document: PageDocument) -> Optional[str]:
        for bar in document.select(bar_selector):
            text = text_content(bar)
            if not any(label in text for label in labels):
                continue
            for name in known:
                if name in text:
                    return name
        return None
    return Probe(f"labelled_text:{bar_selector}", run)


def query_param(*names: str) -> Probe:
    """First non-empty query parameter of the page address."""
    def run(document: PageDocument) -> Optional[str]:
        params = parse_qs(urlparse(document.url).query)
        for name in names:
            values = params.get(name)
            if values and values[0]:
                return values[0]
        return None
    return Probe(f"query:{','.join(names)}", run)


def editor_model(min_length: int = 0) -> Probe:
    """
    Value of a live editor model.

    With min_length, the first editor holding more than min_length
    characters wins, otherwise the first editor. Documents captured outside
    the page context have no editor values and this probe yields None.
    """
    def run(document: PageDocument) -> Optional[str]:
        values = document.editor_values
        if not values:
            return None
        if min_length:
            for value in values:
                if value and len(value) > min_length:
                    return value
        return values[0]
    return Probe("editor_model", run)


def line_join(container: Optional[str], line_selector: str, rstrip: bool = True) -> Probe:
    """
    Join rendered editor lines with newlines.

    Lines are looked up inside the first container match, or across the
    page when container is None. Rendered lines may be virtualized, so this
    is a fallback behind editor_model.
    """
    def run(document: PageDocument) -> Optional[str]:
        root = None
        if container is not None:
            root = document.select_one(container)
            if root is None:
                return None
        lines = document.select(line_selector, root)
        if not lines:
            return None
        texts = [text_content(line) for line in lines]
        if rstrip:
            texts = [text.rstrip() for text in texts]
        return "\n".join(texts)
    return Probe(f"lines:{container or 'page'}>{line_selector}", run)


def textarea_scan(min_length: int = 20, exclude_class: str = "comment") -> Probe:
    """First textarea with enough content that is not a comment box."""
    def run(document: PageDocument) -> Optional[str]:
        for textarea in document.select("textarea"):
            value = element_value(textarea)
            classes = " ".join(textarea.get("class") or [])
            if len(value) > min_length and exclude_class not in classes:
                return value
        return None
    return Probe(f"textarea_scan:>{min_length}", run)


def substantial_text(selectors: Sequence[str], min_length: int = 50) -> Probe:
    """
    Rendered text from the first selector yielding more than min_length
    characters; otherwise the text of the last selector that matched at all.
    """
    def run(document: PageDocument) -> Optional[str]:
        found: Optional[str] = None
        for selector in selectors:
            element = document.select_one(selector)
            if element is None:
                continue
            found = inner_text(element) or text_content(element)
            if len(found.strip()) > min_length:
                break
        return found
    return Probe(f"substantial_text:{len(selectors)}", run)


def each(factory: Callable[[str], Probe], selectors: Iterable[str]) -> List[Probe]:
    """One probe per selector, in order."""
    return [factory(selector) for selector in selectors]


def _pick(document: PageDocument, selector: str, pick: str) -> Optional[Tag]:
    if pick == "last":
        matches = document.select(selector)
        return matches[-1] if matches else None
    return document.select_one(selector)


def _iter_items(
    document: PageDocument,
    item_selector: str,
    containers: Optional[str],
    scope: Sequence[str],
) -> Iterable[Tag]:
    if containers:
        for container in document.select(containers):
            yield from document.select(item_selector, container)
        return
    root = None
    for selector in scope:
        root = document.select_one(selector)
        if root is not None:
            break
    yield from document.select(item_selector, root)
