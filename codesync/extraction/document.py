"""
Page document wrapper used by the selector cascades.

A PageDocument pairs the parsed markup of a coding-practice page with the
values held by the page's live editor models. Editor values only exist when
the snapshot was taken inside the page's own execution context; a document
built from fetched markup alone carries none.
"""
import re
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment, Tag

# Block-level tags that break lines when a browser renders innerText
BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl",
    "dt", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
    "section", "table", "tr", "ul",
}


class PageDocument:
    """Parsed page plus the live editor state captured with it."""
    
    def __init__(self, url: str, html: str, editor_values: Optional[List[str]] = None):
        self.url = url
        self.html = html or ""
        self.editor_values: List[str] = list(editor_values or [])
        self._soup: Optional[BeautifulSoup] = None
    
    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html, "lxml")
        return self._soup
    
    @property
    def hostname(self) -> str:
        return (urlparse(self.url).hostname or "").lower()
    
    @property
    def has_live_state(self) -> bool:
        return bool(self.editor_values)
    
    def select_one(self, selector: str, root: Optional[Tag] = None) -> Optional[Tag]:
        return (root or self.soup).select_one(selector)
    
    def select(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        return (root or self.soup).select(selector)
    
    def without_live_state(self) -> "PageDocument":
        """Copy of this document as seen from outside the page context."""
        return PageDocument(self.url, self.html)


def text_content(element: Tag) -> str:
    """Raw text of an element and its descendants (DOM textContent)."""
    return element.get_text()


def inner_text(element: Tag) -> str:
    """
    Approximate rendered text (DOM innerText).
    
    Block-level children start new lines and hidden elements are skipped.
    Text inside <pre> keeps its own line breaks.
    """
    parts: List[str] = []
    _collect_rendered_text(element, parts)
    text = "".join(parts)
    text = re.sub(r"[ \t]*\n[ \t]*", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def element_value(element: Tag) -> str:
    """Form value of an element: textarea text, option/select value or value attribute."""
    if element.name == "textarea":
        return element.get_text()
    if element.name == "select":
        option = selected_option(element)
        if option is None:
            return ""
        return option.get("value") or option.get_text().strip()
    return element.get("value") or ""


def selected_option(select: Tag) -> Optional[Tag]:
    """The option a browser would report as selected (first one by default)."""
    option = select.find("option", selected=True)
    if option is None:
        option = select.find("option")
    return option


def _is_hidden(element: Tag) -> bool:
    if element.has_attr("hidden"):
        return True
    if element.get("aria-hidden") == "true":
        return True
    style = (element.get("style") or "").replace(" ", "").lower()
    return "display:none" in style or "visibility:hidden" in style


def _collect_rendered_text(element: Tag, parts: List[str]):
    for child in element.children:
        if isinstance(child, Tag):
            if child.name in ("script", "style", "template", "noscript") or _is_hidden(child):
                continue
            if child.name == "br":
                parts.append("\n")
                continue
            if child.name == "pre":
                parts.append("\n" + child.get_text() + "\n")
                continue
            block = child.name in BLOCK_TAGS
            if block:
                parts.append("\n")
            _collect_rendered_text(child, parts)
            if block:
                parts.append("\n")
        elif not isinstance(child, Comment):
            text = str(child)
            # Collapse source-formatting whitespace the way layout does
            parts.append(re.sub(r"\s+", " ", text))
