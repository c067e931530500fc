"""Keyword tables shared by the validator, categorizer and confidence scorer.

Tables are immutable tuples so they can be shared freely between threads.
To support another locale, build a new :class:`Taxonomy` with extended
tables and pass it to the components instead of editing these constants.
"""

import re
from dataclasses import dataclass, field
from typing import Pattern, Tuple

FALLBACK_CATEGORY = "General"

# Order matters: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Shipping",
        ("ship", "deliver", "shipping", "delivery", "tracking", "package",
         "versand", "lieferung", "liefer", "sendungsverfolgung"),
    ),
    (
        "Returns & Refunds",
        ("return", "refund", "exchange", "money back", "cancel",
         "rückgabe", "erstattung", "umtausch", "storn", "widerruf"),
    ),
    (
        "Payment",
        ("pay", "payment", "credit card", "billing", "charge", "cost", "price",
         "bezahlung", "zahlung", "preis", "kosten", "rechnung"),
    ),
    (
        "Account",
        ("account", "login", "password", "profile", "register", "sign up",
         "konto", "anmeldung", "passwort", "profil", "registrier"),
    ),
    (
        "Support",
        ("help", "support", "contact", "customer service", "assistance",
         "hilfe", "kontakt", "kundenservice", "kundendienst"),
    ),
    (
        "Technical",
        ("technical", "bug", "error", "not working", "browser", "mobile",
         "technisch", "fehler", "funktioniert nicht"),
    ),
    (
        FALLBACK_CATEGORY,
        ("what", "how", "when", "where", "why",
         "was", "wie", "wann", "wo", "warum"),
    ),
)

INTERROGATIVE_KEYWORDS: Tuple[str, ...] = (
    "what", "how", "when", "where", "why", "who", "which",
    "can", "do", "does", "is", "are",
    "was", "wie", "wann", "wo", "warum", "wer", "welche", "welcher", "welches",
    "kann", "können", "gibt",
)

AFFIRMATIVE_KEYWORDS: Tuple[str, ...] = (
    "yes", "no", "you can", "we offer", "our", "the",
    "ja", "nein", "sie können", "wir bieten", "unser", "unsere", "der", "die", "das",
)

# Words that are frequent in German prose and rare in English prose.
GERMAN_MARKERS: Tuple[str, ...] = (
    "der", "die", "das", "und", "ist", "sie", "wir", "nicht", "ich", "mit",
    "für", "auf", "eine", "ein", "können", "werden", "wie", "was", "wann",
    "warum", "bei", "ihre", "ihr", "unsere", "oder", "auch",
)

ENGLISH_MARKERS: Tuple[str, ...] = (
    "the", "and", "is", "you", "we", "not", "with", "for", "on", "a", "an",
    "can", "will", "how", "what", "when", "why", "your", "our", "or", "are",
    "do", "does", "to", "of", "in",
)


def keyword_pattern(keywords: Tuple[str, ...]) -> Pattern[str]:
    """Compile a case-insensitive whole-word alternation over *keywords*."""
    # Longest first so multi-word keywords win over their prefixes.
    alternation = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


@dataclass(frozen=True)
class Taxonomy:
    """Bundle of keyword tables plus their compiled whole-word patterns."""

    categories: Tuple[Tuple[str, Tuple[str, ...]], ...] = CATEGORY_KEYWORDS
    interrogatives: Tuple[str, ...] = INTERROGATIVE_KEYWORDS
    affirmatives: Tuple[str, ...] = AFFIRMATIVE_KEYWORDS
    fallback_category: str = FALLBACK_CATEGORY
    interrogative_re: Pattern[str] = field(init=False, repr=False, compare=False)
    affirmative_re: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "interrogative_re", keyword_pattern(self.interrogatives))
        object.__setattr__(self, "affirmative_re", keyword_pattern(self.affirmatives))

    def has_interrogative(self, text: str) -> bool:
        return bool(self.interrogative_re.search(text))

    def has_affirmative(self, text: str) -> bool:
        return bool(self.affirmative_re.search(text))


DEFAULT_TAXONOMY = Taxonomy()
