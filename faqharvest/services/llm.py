"""Input/output contract of the language-model extraction path.

The model call itself lives outside this package.  This module prepares
page text for the prompt and turns the model's reply (a JSON array of
question/answer objects, often wrapped in code fences or prose) into
:class:`FAQItem` records.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from faqharvest.config import ExtractionSettings
from faqharvest.models.faq import Confidence, FAQItem
from faqharvest.services.cleaner import normalize
from faqharvest.services.deduplicator import dedupe
from faqharvest.services.extractor import new_faq_id
from faqharvest.services.scoring import INCOMPLETE_ANSWER_LEN, categorize
from faqharvest.services.taxonomy import DEFAULT_TAXONOMY

logger = logging.getLogger(__name__)

# Longest content sent to the model for one page
MAX_PROMPT_CHARS = 15_000

# Markdown markers carry no meaning for the model
_MARKDOWN_PREFIX_RE = re.compile(r"^\s*[#*-]{1,3}\s*", re.MULTILINE)

_CODE_FENCE_RE = re.compile(r"```(?:json)?\n?")
_LEADING_PROSE_RE = re.compile(r"^[^\[{]*")
_TRAILING_PROSE_RE = re.compile(r"[^}\]]*$")


class LLMReplyError(ValueError):
    """Raised when a model reply cannot be read as a JSON array of FAQs."""


class LLMFAQ(BaseModel):
    """One entry of the model's JSON reply."""

    question: str
    answer: str
    category: Optional[str] = None
    language: Optional[str] = None
    confidence: Optional[Confidence] = None

    @field_validator("question", "answer")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("confidence", mode="before")
    @classmethod
    def _known_confidence(cls, value):
        if isinstance(value, str) and value.lower() in ("high", "medium", "low"):
            return value.lower()
        return None


def prepare_content(content: str) -> str:
    """Strip page chrome and Markdown markers and cap the length for a prompt."""
    cleaned = _MARKDOWN_PREFIX_RE.sub("", normalize(content)).strip()
    if len(cleaned) > MAX_PROMPT_CHARS:
        logger.warning("Content truncated from %d to %d characters", len(cleaned), MAX_PROMPT_CHARS)
        cleaned = cleaned[:MAX_PROMPT_CHARS]
    return cleaned


_CATEGORY_NAMES = {name.lower(): name for name, _ in DEFAULT_TAXONOMY.categories}


def _known_category(entry: LLMFAQ) -> str:
    """Keep a taxonomy category the model named; otherwise categorise the question."""
    if entry.category:
        known = _CATEGORY_NAMES.get(entry.category.strip().lower())
        if known:
            return known
    return categorize(entry.question)


def parse_reply(reply: str) -> List[LLMFAQ]:
    """Decode the model's reply into validated entries.

    Entries missing a question or answer are dropped with a log line.

    Raises:
        LLMReplyError: The reply holds no JSON array.
    """
    cleaned = _CODE_FENCE_RE.sub("", reply)
    cleaned = _LEADING_PROSE_RE.sub("", cleaned)
    cleaned = _TRAILING_PROSE_RE.sub("", cleaned).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LLMReplyError(f"reply is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise LLMReplyError(f"expected a JSON array, got {type(data).__name__}")

    entries: List[LLMFAQ] = []
    for raw in data:
        try:
            entries.append(LLMFAQ.model_validate(raw))
        except ValidationError as exc:
            logger.info("Dropping malformed FAQ entry: %s", exc.errors()[0]["msg"])
    return entries


def items_from_reply(
    reply: str,
    source_url: str,
    settings: Optional[ExtractionSettings] = None,
) -> List[FAQItem]:
    """Build deduplicated FAQ items from a model reply for *source_url*."""
    settings = settings or ExtractionSettings()
    now = datetime.now(timezone.utc)
    items = [
        FAQItem(
            id=new_faq_id(),
            question=entry.question,
            answer=entry.answer,
            category=_known_category(entry),
            language=entry.language or settings.default_language,
            source_url=source_url,
            confidence=entry.confidence or "medium",
            is_incomplete=len(entry.answer) < INCOMPLETE_ANSWER_LEN,
            extracted_at=now,
        )
        for entry in parse_reply(reply)
    ]
    return dedupe(items)
