"""FAQ extraction endpoints: heuristic extraction and LLM reply import."""

import asyncio
import logging
from dataclasses import replace

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from faqharvest.config import load_settings
from faqharvest.models.extract_request import ExtractRequest, LLMImportRequest
from faqharvest.models.extract_response import ExtractResponse
from faqharvest.services.cleaner import normalize
from faqharvest.services.extractor import extract_all, is_productive, summarize
from faqharvest.services.llm import LLMReplyError, items_from_reply
from faqharvest.services.processor import filter_valid_pages, process_pages

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/faqs", tags=["faqs"])


@router.post(
    "/extract",
    response_model=ExtractResponse,
    summary="Extract FAQs from crawled pages",
    description=(
        "Runs every heuristic pattern extractor over each page, validates and "
        "scores the question/answer pairs it finds and returns one FAQ per "
        "distinct question.  An empty `faqs` list is a normal result."
    ),
)
@limiter.limit("10/minute")
async def extract_faqs(request: Request, body: ExtractRequest) -> ExtractResponse:
    settings = load_settings()
    if body.min_content_length is not None:
        settings = replace(settings, min_content_length=body.min_content_length)

    pages = filter_valid_pages(process_pages(body.pages))
    logger.info(
        "Extract request received",
        extra={"pages": len(body.pages), "with_content": len(pages)},
    )

    faqs = await asyncio.to_thread(extract_all, pages, settings=settings)
    processed = sum(1 for page in pages if is_productive(normalize(page.content), settings))

    return ExtractResponse(
        pages_received=len(body.pages),
        pages_processed=processed,
        faqs_found=len(faqs),
        summary=summarize(faqs),
        faqs=faqs,
    )


@router.post(
    "/import-llm",
    response_model=ExtractResponse,
    summary="Convert a language-model reply into FAQ items",
)
@limiter.limit("10/minute")
async def import_llm_reply(request: Request, body: LLMImportRequest) -> ExtractResponse:
    url = str(body.url)
    try:
        faqs = items_from_reply(body.reply, url, load_settings())
    except LLMReplyError as exc:
        logger.warning("Unreadable model reply for %s – %s", url, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    return ExtractResponse(
        pages_received=1,
        pages_processed=1,
        faqs_found=len(faqs),
        summary=summarize(faqs),
        faqs=faqs,
    )
