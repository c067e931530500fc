"""Cross-page FAQ deduplication.

The same question is routinely picked up several times: by more than one
extractor on a page (a ``## Question?`` heading inside an FAQ section), or
on several pages of one site.  Questions are compared after
:func:`normalize_question`; the first occurrence wins and stays in its
position, later copies are dropped, and the survivor is flagged with
``is_duplicate=True`` so reviewers can see it was found more than once.
"""

import re
from typing import Dict, List

from faqharvest.models.faq import FAQItem

_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_question(question: str) -> str:
    """Lower-case *question* and drop punctuation, keeping letters, digits and spaces."""
    stripped = _NON_WORD_RE.sub("", question.lower())
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def dedupe(faqs: List[FAQItem]) -> List[FAQItem]:
    """Collapse FAQs sharing a normalised question into their first occurrence.

    Args:
        faqs: FAQ items in canonical order (page, extractor, match).

    Returns:
        One item per normalised question, in first-seen order.  An item whose
        question occurred more than once has ``is_duplicate`` set.
    """
    positions: Dict[str, int] = {}
    unique: List[FAQItem] = []

    for faq in faqs:
        key = normalize_question(faq.question)
        if key not in positions:
            positions[key] = len(unique)
            unique.append(faq)
            continue
        index = positions[key]
        if not unique[index].is_duplicate:
            unique[index] = unique[index].model_copy(update={"is_duplicate": True})

    return unique
