"""Turn raw crawl records into :class:`PageContent` for the extraction core."""

import logging
from typing import Iterable, List

from bs4 import Tag
from markdownify import markdownify

from faqharvest.models.page import CrawlRecord, PageContent
from faqharvest.services.sanitizer import sanitize

logger = logging.getLogger(__name__)

# Pages with less content than this are dropped before extraction is attempted
MIN_PAGE_CONTENT = 10

_PLACEHOLDER = "FAQHARVESTBLOCK{}END"


def _is_widget(tag: Tag) -> bool:
    """True for markup read by the HTML-based extractors."""
    if tag.name == "details":
        return True
    return any("accordion" in str(cls).lower() for cls in tag.get("class", []))


def _outermost_widgets(root: Tag) -> List[Tag]:
    blocks: List[Tag] = []
    for tag in root.find_all(_is_widget):
        if any(parent is block for block in blocks for parent in tag.parents):
            continue
        blocks.append(tag)
    return blocks


def html_to_content(html: str) -> str:
    """Convert *html* to Markdown, keeping FAQ widgets as raw HTML.

    Headings, bold text and lists become Markdown for the text-based
    extractors, while ``<details>`` and accordion blocks stay as markup so
    the HTML-based extractors can still read them.
    """
    soup = sanitize(html)
    root = soup.find("body") or soup

    preserved: List[str] = []
    for block in _outermost_widgets(root):
        marker = soup.new_tag("p")
        marker.string = _PLACEHOLDER.format(len(preserved))
        preserved.append(str(block))
        block.replace_with(marker)

    content = markdownify(str(root), heading_style="ATX").strip()
    for index, block_html in enumerate(preserved):
        content = content.replace(_PLACEHOLDER.format(index), block_html)
    return content


def _pick_content(record: CrawlRecord) -> str:
    if record.markdown and record.markdown.strip():
        return record.markdown.strip()
    if record.content and record.content.strip():
        return record.content.strip()
    if record.html and record.html.strip():
        return html_to_content(record.html)
    return ""


def process_pages(records: Iterable[CrawlRecord]) -> List[PageContent]:
    """Map crawl records to :class:`PageContent`, preferring Markdown bodies.

    The page URL comes from ``metadata["sourceURL"]`` when the crawler
    reports one, else from the record itself.
    """
    pages: List[PageContent] = []
    for record in records:
        url = str(record.metadata.get("sourceURL") or record.url or "")
        pages.append(PageContent(url=url, content=_pick_content(record), metadata=record.metadata))
    return pages


def filter_valid_pages(pages: Iterable[PageContent], min_length: int = MIN_PAGE_CONTENT) -> List[PageContent]:
    """Drop pages whose content is empty or shorter than *min_length*."""
    kept: List[PageContent] = []
    for page in pages:
        if len(page.content.strip()) > min_length:
            kept.append(page)
        else:
            logger.info("Dropping %s: only %d characters of content", page.url, len(page.content))
    logger.info("Filtered to %d pages with content", len(kept))
    return kept
