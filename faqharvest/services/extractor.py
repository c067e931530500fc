"""Extraction orchestrator: pages in, deduplicated FAQ items out."""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from faqharvest.config import ExtractionSettings
from faqharvest.models.extract_response import ExtractionSummary
from faqharvest.models.faq import FAQCandidate, FAQItem
from faqharvest.models.page import PageContent
from faqharvest.services.cleaner import clean_text, normalize
from faqharvest.services.deduplicator import dedupe
from faqharvest.services.patterns import DEFAULT_EXTRACTORS, PatternExtractor
from faqharvest.services.scoring import (
    categorize,
    detect_language,
    is_incomplete,
    score_confidence,
)
from faqharvest.services.taxonomy import DEFAULT_TAXONOMY, Taxonomy
from faqharvest.services.validator import is_valid_cleaned

logger = logging.getLogger(__name__)


def new_faq_id() -> str:
    return f"faq-{uuid.uuid4().hex}"


def build_faq_item(
    candidate: FAQCandidate,
    source_url: str,
    settings: Optional[ExtractionSettings] = None,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> Optional[FAQItem]:
    """Clean and validate *candidate*; return the scored item or *None* if rejected."""
    settings = settings or ExtractionSettings()
    question = clean_text(candidate.question)
    answer = clean_text(candidate.answer)
    if not is_valid_cleaned(question, answer, taxonomy):
        return None

    return FAQItem(
        id=new_faq_id(),
        question=question,
        answer=answer,
        category=categorize(question, taxonomy),
        language=detect_language(question, answer, default=settings.default_language),
        source_url=source_url,
        confidence=score_confidence(question, answer, taxonomy),
        is_incomplete=is_incomplete(answer),
        is_duplicate=False,
        extracted_at=datetime.now(timezone.utc),
    )


def is_productive(text: str, settings: ExtractionSettings) -> bool:
    """True when normalised *text* is long enough to be worth scanning."""
    return len(text) >= settings.min_content_length


def extract_page(
    page: PageContent,
    extractors: Sequence[PatternExtractor] = DEFAULT_EXTRACTORS,
    settings: Optional[ExtractionSettings] = None,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> List[FAQItem]:
    """Run every extractor over one page and return its accepted FAQ items.

    The page is skipped when its normalised content is shorter than
    ``settings.min_content_length``.  An extractor that raises is logged and
    skipped; the remaining extractors still run.
    """
    settings = settings or ExtractionSettings()
    text = normalize(page.content)
    if not is_productive(text, settings):
        logger.info(
            "Skipping %s: %d characters after normalisation (minimum %d)",
            page.url, len(text), settings.min_content_length,
        )
        return []

    items: List[FAQItem] = []
    for extractor in extractors:
        try:
            candidates = extractor(text, page.url)
        except Exception as exc:
            logger.warning("Extractor %s failed on %s: %s", _name(extractor), page.url, exc)
            continue
        for candidate in candidates:
            item = build_faq_item(candidate, page.url, settings, taxonomy)
            if item is not None:
                items.append(item)

    logger.info("Extracted %d FAQ candidates from %s", len(items), page.url)
    return items


def extract_all(
    pages: Iterable[PageContent],
    extractors: Sequence[PatternExtractor] = DEFAULT_EXTRACTORS,
    settings: Optional[ExtractionSettings] = None,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> List[FAQItem]:
    """Extract, concatenate and deduplicate FAQs across *pages*.

    Items are ordered by page, then extractor, then match position before a
    single deduplication pass, so the first occurrence of a question always
    wins.  With ``settings.max_workers > 1`` pages are processed in a thread
    pool; ``Executor.map`` hands results back in page order.

    Returns:
        The final FAQ list; empty when no page yields a valid pair.
    """
    settings = settings or ExtractionSettings()
    pages = list(pages)

    def _run(page: PageContent) -> List[FAQItem]:
        return extract_page(page, extractors, settings, taxonomy)

    if settings.max_workers > 1 and len(pages) > 1:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
            per_page = list(pool.map(_run, pages))
    else:
        per_page = [_run(page) for page in pages]

    collected = [item for items in per_page for item in items]
    faqs = dedupe(collected)
    logger.info(
        "Extraction finished: %d pages, %d candidates, %d unique FAQs",
        len(pages), len(collected), len(faqs),
    )
    return faqs


def summarize(faqs: Iterable[FAQItem]) -> ExtractionSummary:
    """Count confidence tiers, incomplete answers and duplicates in *faqs*."""
    summary = ExtractionSummary()
    for faq in faqs:
        if faq.confidence == "high":
            summary.high_confidence += 1
        elif faq.confidence == "medium":
            summary.medium_confidence += 1
        else:
            summary.low_confidence += 1
        summary.incomplete += int(faq.is_incomplete)
        summary.duplicates += int(faq.is_duplicate)
    return summary


def _name(extractor: PatternExtractor) -> str:
    return getattr(extractor, "__name__", repr(extractor))
