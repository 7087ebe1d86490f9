"""
Job text extraction from a page the user already has open.

This reads the rendered document it is given; it never fetches anything.

Strategy:
1. Drop noise (nav, footer, ads, sidebars) from a copy of the body
2. Pick the first main-content container that matches
3. Flatten to text and tidy whitespace
4. Read the title from the untouched document
"""
import copy
import re
from datetime import datetime, timezone
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from jobsummary.models import DEFAULT_TITLE, ExtractionResult

# Common noise elements, removed before any text is read
EXCLUDE_SELECTORS = (
    "nav",
    "header",
    "footer",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    ".navigation",
    ".navbar",
    ".header",
    ".footer",
    ".sidebar",
    ".advertisement",
    ".ad",
    ".cookie-banner",
    ".modal",
    ".popup",
)

# Tried in order against the cleaned copy; first match wins
MAIN_CONTENT_SELECTORS = (
    "main",
    '[role="main"]',
    ".job-description",
    ".job-details",
    ".posting-description",
    "#job-description",
    "#job-details",
    "article",
    ".content",
)

# Tried in order against the original document
TITLE_SELECTORS = (
    "h1",
    ".job-title",
    ".posting-title",
    "[data-job-title]",
    ".title",
)

# Present in the markup but never rendered as text
NON_RENDERED_TAGS = ("script", "style", "noscript", "template")

BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "dd", "details", "div", "dl",
    "dt", "fieldset", "figcaption", "figure", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "hr", "li", "main", "ol", "p", "pre", "section", "summary",
    "table", "tr", "ul",
})

_HTML_WS = re.compile(r"\s+")
_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_NEWLINE_RUNS = re.compile(r"\s*\n\s*")


def clean_text(raw: str) -> str:
    """Collapse whitespace runs to one space and newline runs to one newline."""
    text = _HORIZONTAL_WS.sub(" ", raw)
    text = _NEWLINE_RUNS.sub("\n", text)
    return text.strip()


def _visible_text(node: Tag) -> str:
    # source whitespace renders as a single space outside <pre>
    for text_node in node.find_all(string=True):
        if type(text_node) is NavigableString and text_node.find_parent("pre") is None:
            text_node.replace_with(NavigableString(_HTML_WS.sub(" ", text_node)))
    # mark block boundaries so adjacent blocks do not run together
    for br in node.find_all("br"):
        br.replace_with(NavigableString("\n"))
    for block in node.find_all(sorted(BLOCK_TAGS)):
        block.insert_after(NavigableString("\n"))
    return node.get_text()


def _strip_noise(root: Tag) -> Tag:
    for el in root.find_all(list(NON_RENDERED_TAGS)):
        el.extract()
    for selector in EXCLUDE_SELECTORS:
        for el in root.select(selector):
            el.extract()
    return root


def find_main_content(root: Tag) -> Tag:
    for selector in MAIN_CONTENT_SELECTORS:
        found = root.select_one(selector)
        if found is not None:
            return found
    return root


def find_title(soup: BeautifulSoup) -> str:
    for selector in TITLE_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        # rendered text of a copy, so the page keeps its markup
        title = clean_text(_visible_text(copy.copy(el)))
        if title:
            return title
    return DEFAULT_TITLE


def extract_job_text(
    page: Union[str, BeautifulSoup],
    url: str = "",
    extracted_at: Optional[datetime] = None,
) -> ExtractionResult:
    """Build an ExtractionResult from a page's HTML.

    Works on a copy of the body, so the page passed in is left as it was.
    A page with no usable text gives empty content, never an error.
    """
    soup = page if isinstance(page, BeautifulSoup) else BeautifulSoup(page or "", "html.parser")

    body_clone = copy.copy(soup.body if soup.body is not None else soup)
    content = find_main_content(_strip_noise(body_clone))

    return ExtractionResult(
        title=find_title(soup),
        content=clean_text(_visible_text(content)),
        url=url,
        extracted_at=extracted_at or datetime.now(timezone.utc),
    )
