from datetime import datetime
from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Confidence = Literal["high", "medium", "low"]


class FAQCandidate(NamedTuple):
    """Unvalidated question/answer pair produced by a single pattern extractor."""

    question: str
    answer: str


class FAQItem(BaseModel):
    """Validated FAQ record with category, confidence and duplication flags.

    Fields serialise with camelCase aliases (``sourceUrl``, ``isDuplicate``,
    ...) and accept either spelling on input.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    question: str
    answer: str
    category: str
    language: str
    source_url: str
    confidence: Confidence
    is_incomplete: bool
    is_duplicate: bool = False
    extracted_at: datetime
