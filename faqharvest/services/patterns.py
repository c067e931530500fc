"""Pattern extractors: independent strategies for finding Q/A pairs in page text.

Every extractor takes the normalised page text and the page URL and returns
the raw :class:`~faqharvest.models.faq.FAQCandidate` pairs it found, in
match order.  Extractors keep no state and never raise on odd input; the
orchestrator runs all of them over every page and concatenates the results.

Strategies
----------
``extract_disclosure_widgets``
    ``<details>`` elements, the ``<summary>`` being the question.
``extract_accordions``
    Elements with an ``accordion`` class holding a header and a content part.
``extract_header_paragraphs``
    Markdown headings containing ``?`` followed by body text.
``extract_bold_questions``
    ``**Bold question?**`` lines followed by body text.
``extract_labelled_pairs``
    ``Q:`` / ``A:`` (``Question:``/``Answer:``, ``Frage:``/``Antwort:``) blocks.
``extract_list_items``
    Numbered or bulleted list items that ask a question.
``extract_faq_sections``
    Line-proximity scan inside sections titled "FAQ", "Q&A", ...
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from faqharvest.models.faq import FAQCandidate
from faqharvest.services.cleaner import clean_text
from faqharvest.services.taxonomy import DEFAULT_TAXONOMY

logger = logging.getLogger(__name__)

PatternExtractor = Callable[[str, str], List[FAQCandidate]]


# ---------------------------------------------------------------------------
# HTML-based strategies
# ---------------------------------------------------------------------------

def extract_disclosure_widgets(text: str, source_url: str) -> List[FAQCandidate]:
    """Pair each outermost ``<details>`` summary with the rest of its body."""
    if "<details" not in text.lower():
        return []

    soup = BeautifulSoup(text, "lxml")
    candidates: List[FAQCandidate] = []
    for details in soup.find_all("details"):
        # Nested widgets are already part of the outer widget's answer
        if details.find_parent("details") is not None:
            continue
        summary = details.find("summary", recursive=False)
        if summary is None:
            continue
        question = summary.get_text(" ", strip=True)
        summary.extract()
        answer = details.get_text(" ", strip=True)
        candidates.append(FAQCandidate(question, answer))

    logger.debug("Disclosure widgets: %d candidates on %s", len(candidates), source_url)
    return candidates


_HEADER_MARKER_RE = re.compile(
    r"(?<![a-z])(?:header|heading|title|question|trigger|toggle|button)(?![a-z])"
)
_CONTENT_MARKER_RE = re.compile(
    r"(?<![a-z])(?:content|body|panel|collapse|answer)(?![a-z])"
)
_HEADER_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6", "button", "summary", "dt"}


def _class_tokens(tag: Tag) -> List[str]:
    return [str(cls).lower() for cls in tag.get("class", [])]


def _is_accordion_block(tag: Tag) -> bool:
    """True for the wrapper of an accordion item (not its header or panel)."""
    return any(
        "accordion" in cls
        and not _HEADER_MARKER_RE.search(cls)
        and not _CONTENT_MARKER_RE.search(cls)
        for cls in _class_tokens(tag)
    )


def _is_accordion_header(tag: Tag) -> bool:
    if tag.name in _HEADER_TAGS:
        return True
    return any(_HEADER_MARKER_RE.search(cls) for cls in _class_tokens(tag))


def _is_accordion_content(tag: Tag) -> bool:
    return any(_CONTENT_MARKER_RE.search(cls) for cls in _class_tokens(tag))


def _related(a: Tag, b: Tag) -> bool:
    """True when *a* and *b* are the same element or one contains the other."""
    return a is b or any(p is b for p in a.parents) or any(p is a for p in b.parents)


def _accordion_pair(block: Tag) -> Optional[Tuple[str, str]]:
    header = block.find(_is_accordion_header)
    if header is None:
        return None
    for candidate in block.find_all(_is_accordion_content):
        if _related(candidate, header):
            continue
        question = header.get_text(" ", strip=True)
        answer = candidate.get_text(" ", strip=True)
        if question and answer:
            return question, answer
        return None
    return None


def extract_accordions(text: str, source_url: str) -> List[FAQCandidate]:
    """Read header/content pairs out of the innermost accordion items."""
    if "accordion" not in text.lower():
        return []

    soup = BeautifulSoup(text, "lxml")
    blocks = soup.find_all(_is_accordion_block)
    pairs: Dict[int, Tuple[str, str]] = {}
    for block in blocks:
        pair = _accordion_pair(block)
        if pair is not None:
            pairs[id(block)] = pair

    candidates: List[FAQCandidate] = []
    for block in blocks:
        pair = pairs.get(id(block))
        if pair is None:
            continue
        # A wrapper around several items would repeat its first item's pair
        if any(id(inner) in pairs for inner in block.find_all(_is_accordion_block)):
            continue
        candidates.append(FAQCandidate(*pair))

    logger.debug("Accordions: %d candidates on %s", len(candidates), source_url)
    return candidates


# ---------------------------------------------------------------------------
# Markdown / plain-text strategies
# ---------------------------------------------------------------------------
#
# Each strategy locates a question line with a regex, then reads the answer
# block below it: leading blank lines are skipped, then consecutive non-blank
# lines are collected until a blank line or the strategy's stop marker.

_NEXT_LINE_RE = re.compile(r"\n([^\n]*)")

_LIST_MARKER = r"(?:\d+[.)]|[-*+])[ \t]+"
_QUESTION_LABEL = r"(?:\*\*)?(?:q|question|frage)[ \t]*(?:\d+[ \t]*)?[:：](?:\*\*)?"
_ANSWER_LABEL = r"(?:\*\*)?(?:a|answer|antwort)[ \t]*(?:\d+[ \t]*)?[:：](?:\*\*)?"

# Heading containing a "?"; the answer stops at the next heading
_HEADING_QUESTION_RE = re.compile(
    r"^[ \t]*#{1,6}[ \t]*(?P<question>[^\n]*\?[^\n]*)$", re.MULTILINE
)
_HEADING_STOP_RE = re.compile(r"[ \t]*#")

# "**Question?**" opening a line, optionally followed by the answer inline
_BOLD_QUESTION_RE = re.compile(
    r"^[ \t]*\*\*(?P<question>[^*\n]+\?)[ \t]*\*\*[ \t]*(?P<inline>[^\n]*)$", re.MULTILINE
)
_BOLD_STOP_RE = re.compile(r"[ \t]*(?:\*\*|#)")

# "Q: ..." line, optional blank lines, then "A: ..." line
_LABELLED_PAIR_RE = re.compile(
    rf"^[ \t]*{_QUESTION_LABEL}[ \t]*(?P<question>[^\n]+?)[ \t]*\n"
    rf"(?:[ \t]*\n)*"
    rf"[ \t]*{_ANSWER_LABEL}[ \t]*(?P<inline>[^\n]*)$",
    re.IGNORECASE | re.MULTILINE,
)
_LABELLED_STOP_RE = re.compile(rf"[ \t]*{_QUESTION_LABEL}", re.IGNORECASE)

_LIST_QUESTION_RE = re.compile(
    rf"^[ \t]*{_LIST_MARKER}(?P<question>[^\n]*\?[^\n]*)$", re.MULTILINE
)
_LIST_STOP_RE = re.compile(rf"[ \t]*(?:{_LIST_MARKER}|#)")


def _answer_block(text: str, pos: int, stop_re: "re.Pattern[str]", started: bool) -> Tuple[List[str], int]:
    """Collect the answer lines following *pos*; return them and the end offset."""
    lines: List[str] = []
    while True:
        match = _NEXT_LINE_RE.match(text, pos)
        if match is None:
            break
        line = match.group(1)
        if not line.strip():
            if started or lines:
                break
            pos = match.end()
            continue
        if stop_re.match(line):
            break
        lines.append(line.strip())
        pos = match.end()
    return lines, pos


def _scan(question_re: "re.Pattern[str]", stop_re: "re.Pattern[str]", text: str) -> List[FAQCandidate]:
    candidates: List[FAQCandidate] = []
    pos = 0
    while True:
        match = question_re.search(text, pos)
        if match is None:
            return candidates
        inline = (match.groupdict().get("inline") or "").strip()
        lines, pos = _answer_block(text, match.end(), stop_re, started=bool(inline))
        answer = "\n".join([inline] + lines if inline else lines)
        candidates.append(FAQCandidate(match.group("question"), answer))


def extract_header_paragraphs(text: str, source_url: str) -> List[FAQCandidate]:
    return _scan(_HEADING_QUESTION_RE, _HEADING_STOP_RE, text)


def extract_bold_questions(text: str, source_url: str) -> List[FAQCandidate]:
    return _scan(_BOLD_QUESTION_RE, _BOLD_STOP_RE, text)


def extract_labelled_pairs(text: str, source_url: str) -> List[FAQCandidate]:
    """``Q:``/``A:`` pairs; an answer ends at a blank line or the next question label."""
    return _scan(_LABELLED_PAIR_RE, _LABELLED_STOP_RE, text)


def extract_list_items(text: str, source_url: str) -> List[FAQCandidate]:
    return _scan(_LIST_QUESTION_RE, _LIST_STOP_RE, text)


# ---------------------------------------------------------------------------
# FAQ-section proximity strategy
# ---------------------------------------------------------------------------

_FAQ_TITLE_RE = re.compile(
    r"frequently\s+asked\s+questions|\bfaqs?\b|\bq\s*&\s*a\b|questions\s+(?:and|&)\s+answers"
    r"|häufig\s+gestellte\s+fragen|häufige\s+fragen",
    re.IGNORECASE,
)
_HEADING_LEVEL_RE = re.compile(r"^[ \t]*(#{1,6})(?!#)")
_LIST_PREFIX_RE = re.compile(rf"^[ \t]*{_LIST_MARKER}")

# A keyword line that is not a heading only opens a section when it is short
_MAX_TITLE_LINE_LEN = 60

QUESTION_LINE_MIN_LEN = 10
QUESTION_LINE_MAX_LEN = 200
ANSWER_LINE_MIN_LEN = 10
MAX_ANSWER_LINES = 5
ANSWER_SOFT_LIMIT = 50


def _heading_level(line: str) -> int:
    match = _HEADING_LEVEL_RE.match(line)
    return len(match.group(1)) if match else 0


def _plain_line(line: str) -> str:
    return clean_text(_LIST_PREFIX_RE.sub("", line))


def _is_faq_title(line: str, level: int) -> bool:
    plain = _plain_line(line)
    if not _FAQ_TITLE_RE.search(plain):
        return False
    return level > 0 or len(plain) <= _MAX_TITLE_LINE_LEN


def is_question_line(line: str) -> bool:
    """True when a single cleaned line reads like a standalone question."""
    return (
        line.endswith("?")
        and QUESTION_LINE_MIN_LEN <= len(line) <= QUESTION_LINE_MAX_LEN
        and DEFAULT_TAXONOMY.has_interrogative(line)
    )


def _scan_section(lines: List[str]) -> List[FAQCandidate]:
    plain = [p for p in (_plain_line(line) for line in lines) if p]
    candidates: List[FAQCandidate] = []
    i = 0
    while i < len(plain):
        question = plain[i]
        i += 1
        if not is_question_line(question):
            continue
        parts: List[str] = []
        while i < len(plain) and len(parts) < MAX_ANSWER_LINES:
            line = plain[i]
            if is_question_line(line):
                break
            i += 1
            if len(line) < ANSWER_LINE_MIN_LEN:
                continue
            parts.append(line)
            answer = " ".join(parts)
            if len(answer) > ANSWER_SOFT_LIMIT and answer[-1] in ".!?":
                break
        if parts:
            candidates.append(FAQCandidate(question, " ".join(parts)))
    return candidates


def extract_faq_sections(text: str, source_url: str) -> List[FAQCandidate]:
    """Scan sections titled FAQ / Q&A / ... for question lines and nearby answers.

    A section opened by a heading ends at the next heading of the same or a
    higher level; one opened by a plain keyword line runs to the end.
    """
    lines = text.split("\n")
    candidates: List[FAQCandidate] = []
    i = 0
    while i < len(lines):
        level = _heading_level(lines[i])
        if not _is_faq_title(lines[i], level):
            i += 1
            continue
        end = i + 1
        if level:
            while end < len(lines):
                next_level = _heading_level(lines[end])
                if next_level and next_level <= level:
                    break
                end += 1
        else:
            end = len(lines)
        candidates.extend(_scan_section(lines[i + 1:end]))
        i = end
    return candidates


DEFAULT_EXTRACTORS: Tuple[PatternExtractor, ...] = (
    extract_disclosure_widgets,
    extract_accordions,
    extract_header_paragraphs,
    extract_bold_questions,
    extract_labelled_pairs,
    extract_list_items,
    extract_faq_sections,
)
