"""Accept or reject a question/answer candidate before it becomes an FAQ item."""

from faqharvest.services.cleaner import clean_text
from faqharvest.services.taxonomy import DEFAULT_TAXONOMY, Taxonomy

QUESTION_MIN_LEN = 10
QUESTION_MAX_LEN = 300
ANSWER_MIN_LEN = 15
ANSWER_MAX_LEN = 1000

_PLACEHOLDER = "lorem ipsum"


def is_valid_cleaned(question: str, answer: str, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> bool:
    """Validate a pair that has already been through :func:`clean_text`."""
    if not QUESTION_MIN_LEN <= len(question) <= QUESTION_MAX_LEN:
        return False
    if not ANSWER_MIN_LEN <= len(answer) <= ANSWER_MAX_LEN:
        return False
    if question == answer:
        return False
    if _PLACEHOLDER in question.lower() or _PLACEHOLDER in answer.lower():
        return False
    # A much shorter answer than question usually means a mis-paired fragment.
    if len(answer) * 2 < len(question):
        return False
    return "?" in question or taxonomy.has_interrogative(question)


def is_valid(question: str, answer: str, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> bool:
    """Return True when the cleaned *question*/*answer* pair looks like a real FAQ."""
    return is_valid_cleaned(clean_text(question), clean_text(answer), taxonomy)
