from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic.alias_generators import to_camel

from faqharvest.config import DEFAULT_MAX_CONTENT_LENGTH, load_settings
from faqharvest.models.page import CrawlRecord


class ExtractRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pages: List[CrawlRecord] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Crawled page records to mine for FAQs (1–100).",
    )
    min_content_length: Optional[int] = Field(
        default=None,
        ge=0,
        le=5_000,
        description="Override for the minimum normalised page length; pages below it are skipped.",
    )

    @field_validator("pages")
    @classmethod
    def _check_page_sizes(cls, pages: List[CrawlRecord]) -> List[CrawlRecord]:
        limit = load_settings().max_content_length
        for page in pages:
            for body in (page.markdown, page.content, page.html):
                if body and len(body) > limit:
                    raise ValueError(f"page content exceeds {limit} characters")
        return pages


class LLMImportRequest(BaseModel):
    url: HttpUrl
    reply: str = Field(
        ...,
        min_length=1,
        max_length=DEFAULT_MAX_CONTENT_LENGTH,
        description="Raw text returned by the language model for this page.",
    )
