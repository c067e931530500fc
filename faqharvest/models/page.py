from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PageContent(BaseModel):
    """One crawled page as handed to the extraction core."""

    model_config = ConfigDict(frozen=True)

    url: str
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CrawlRecord(BaseModel):
    """Raw page record as returned by a crawl service.

    Any of ``markdown``, ``content`` or ``html`` may carry the page body;
    :func:`faqharvest.services.processor.process_pages` picks the best one.
    """

    url: Optional[str] = None
    markdown: Optional[str] = None
    content: Optional[str] = None
    html: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
