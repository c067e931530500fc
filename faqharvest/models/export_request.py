from typing import List

from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from pydantic.alias_generators import to_camel

from faqharvest.models.faq import FAQItem


class ExportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_url: HttpUrl
    faqs: List[FAQItem] = Field(default_factory=list, max_length=5_000)
