"""Export endpoint: download a reviewed FAQ list as CSV or tab-separated values."""

import io
import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from faqharvest.models.export_request import ExportRequest
from faqharvest.routers.extract import limiter
from faqharvest.services.exporter import ExportFormat, export_filename, to_csv, to_spreadsheet

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/faqs", tags=["faqs"])

_MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "tsv": "text/tab-separated-values; charset=utf-8",
}


@router.post("/export", summary="Export FAQs as a downloadable file")
@limiter.limit("30/minute")
async def export_faqs(
    request: Request,
    body: ExportRequest,
    format: ExportFormat = Query(default="csv", description="Output format: 'csv' or 'tsv'."),
) -> StreamingResponse:
    source_url = str(body.source_url)
    logger.info("Export request received", extra={"items": len(body.faqs), "format": format})

    if format == "tsv":
        content = to_spreadsheet(body.faqs, source_url)
    else:
        content = to_csv(body.faqs, source_url)

    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type=_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{export_filename(format)}"'},
    )
