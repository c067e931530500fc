"""CSV and spreadsheet exports of a final FAQ list."""

import csv
import io
from datetime import date, datetime, timezone
from typing import List, Literal, Optional
from urllib.parse import urlparse

from faqharvest.models.faq import FAQItem

ExportFormat = Literal["csv", "tsv"]

_CSV_HEADERS = [
    "Question",
    "Answer",
    "Category",
    "Language",
    "Source URL",
    "Confidence",
    "Is Incomplete",
    "Is Duplicate",
    "Extracted At",
]

_SHEET_HEADERS = [
    "ID",
    "Question",
    "Answer",
    "Category",
    "Language",
    "Source URL",
    "Confidence Level",
    "Is Incomplete",
    "Is Duplicate",
    "Extracted At",
    "Word Count (Answer)",
    "Character Count (Answer)",
]


def _metadata_lines(faqs: List[FAQItem], source_url: str, exported_at: datetime, sep: str) -> List[str]:
    return [
        f"# Extracted From{sep}{source_url}",
        f"# Export Date{sep}{exported_at.isoformat()}",
        f"# Total Items{sep}{len(faqs)}",
        f"# Source Domain{sep}{urlparse(source_url).hostname or ''}",
    ]


def to_csv(faqs: List[FAQItem], source_url: str, exported_at: Optional[datetime] = None) -> str:
    """Render *faqs* as CSV preceded by ``#`` metadata comment lines."""
    exported_at = exported_at or datetime.now(timezone.utc)
    buffer = io.StringIO()
    buffer.write("# FAQ Export Metadata\n")
    for line in _metadata_lines(faqs, source_url, exported_at, ": "):
        buffer.write(line + "\n")
    buffer.write("\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(_CSV_HEADERS)
    for faq in faqs:
        writer.writerow([
            faq.question,
            faq.answer,
            faq.category,
            faq.language,
            faq.source_url,
            faq.confidence,
            str(faq.is_incomplete).lower(),
            str(faq.is_duplicate).lower(),
            faq.extracted_at.isoformat(),
        ])
    return buffer.getvalue()


def to_spreadsheet(faqs: List[FAQItem], source_url: str, exported_at: Optional[datetime] = None) -> str:
    """Render *faqs* as tab-separated values with a summary block on top.

    Tabs open cleanly in Excel and LibreOffice without an extra dependency.
    """
    exported_at = exported_at or datetime.now(timezone.utc)
    buffer = io.StringIO()
    buffer.write("# FAQ Export Summary\n")
    summary = _metadata_lines(faqs, source_url, exported_at, "\t") + [
        f"# High Confidence\t{sum(1 for f in faqs if f.confidence == 'high')}",
        f"# Medium Confidence\t{sum(1 for f in faqs if f.confidence == 'medium')}",
        f"# Low Confidence\t{sum(1 for f in faqs if f.confidence == 'low')}",
        f"# Incomplete Items\t{sum(1 for f in faqs if f.is_incomplete)}",
        f"# Duplicate Items\t{sum(1 for f in faqs if f.is_duplicate)}",
    ]
    for line in summary:
        buffer.write(line + "\n")
    buffer.write("\n")

    writer = csv.writer(buffer, delimiter="\t", quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(_SHEET_HEADERS)
    for faq in faqs:
        writer.writerow([
            faq.id,
            faq.question,
            faq.answer,
            faq.category,
            faq.language,
            faq.source_url,
            faq.confidence,
            "Yes" if faq.is_incomplete else "No",
            "Yes" if faq.is_duplicate else "No",
            faq.extracted_at.isoformat(),
            len(faq.answer.split()),
            len(faq.answer),
        ])
    return buffer.getvalue()


def export_filename(fmt: ExportFormat, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"faq-export-{today.isoformat()}.{fmt}"
