from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from faqharvest.models.faq import FAQItem


class ExtractionSummary(BaseModel):
    """Aggregate counts over a final FAQ list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    high_confidence: int = 0
    medium_confidence: int = 0
    low_confidence: int = 0
    incomplete: int = 0
    duplicates: int = 0


class ExtractResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pages_received: int
    pages_processed: int
    faqs_found: int
    summary: ExtractionSummary
    faqs: List[FAQItem]
