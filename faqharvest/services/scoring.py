"""Category, confidence and language heuristics for accepted FAQ pairs."""

import re

from faqharvest.models.faq import Confidence
from faqharvest.services.cleaner import clean_text
from faqharvest.services.taxonomy import (
    DEFAULT_TAXONOMY,
    ENGLISH_MARKERS,
    GERMAN_MARKERS,
    Taxonomy,
)

INCOMPLETE_ANSWER_LEN = 30

HIGH_CONFIDENCE_SCORE = 6
MEDIUM_CONFIDENCE_SCORE = 4

_WORD_RE = re.compile(r"\w+")
_GERMAN_CHARS_RE = re.compile(r"[äöüß]", re.IGNORECASE)
_GERMAN_WORDS = frozenset(GERMAN_MARKERS)
_ENGLISH_WORDS = frozenset(ENGLISH_MARKERS)


def categorize(question: str, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> str:
    """Return the first taxonomy category with a keyword contained in *question*."""
    lowered = question.lower()
    for category, keywords in taxonomy.categories:
        if any(keyword in lowered for keyword in keywords):
            return category
    return taxonomy.fallback_category


def confidence_points(question: str, answer: str, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> int:
    """Sum the fixed-weight quality signals of a question/answer pair."""
    score = 0
    if "?" in question:
        score += 2
    if len(question) > 20:
        score += 1
    if taxonomy.has_interrogative(question):
        score += 1

    if len(answer) > 50:
        score += 2
    if "." in answer:
        score += 1
    if taxonomy.has_affirmative(answer):
        score += 1
    if len(answer) > 2 * len(question):
        score += 1
    return score


def score_confidence(question: str, answer: str, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> Confidence:
    score = confidence_points(question, answer, taxonomy)
    if score >= HIGH_CONFIDENCE_SCORE:
        return "high"
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return "medium"
    return "low"


def is_incomplete(answer: str) -> bool:
    """True when the cleaned answer is too short to be a useful reply."""
    return len(clean_text(answer)) < INCOMPLETE_ANSWER_LEN


def detect_language(question: str, answer: str = "", default: str = "English") -> str:
    """Best-effort English/German guess from marker-word counts.

    Anything that is not clearly German is reported as *default*.
    """
    words = _WORD_RE.findall(f"{question} {answer}".lower())
    if not words:
        return default
    german = sum(1 for w in words if w in _GERMAN_WORDS)
    english = sum(1 for w in words if w in _ENGLISH_WORDS)
    german += len(_GERMAN_CHARS_RE.findall(question + answer))
    if german >= 2 and german > english * 2:
        return "German"
    return default
