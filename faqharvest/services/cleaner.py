"""Text clean-up for crawled page content and extracted FAQ fields.

:func:`normalize` removes page chrome (navigation words, social buttons,
legal footers, cookie notices) line by line while leaving the structural
markers the pattern extractors rely on (``#`` headings, ``**bold**``, list
markers, ``<details>`` / accordion markup) untouched.

:func:`clean_text` is the much more aggressive clean-up applied to a single
question or answer before validation and before it is stored on an
:class:`~faqharvest.models.faq.FAQItem`.
"""

import html
import re

from bs4 import BeautifulSoup

# Whole-line navigation labels, optionally as a bare markdown link or list item.
_NAV_WORDS = (
    r"home|about|about us|contact|contact us|privacy|terms|login|log in|sign in|"
    r"sign up|register|menu|search|newsletter|subscribe|cart|"
    r"startseite|über uns|kontakt|datenschutz|impressum|agb|anmelden|"
    r"registrieren|suche|warenkorb"
)
_NAV_LINE_RE = re.compile(
    rf"^[ \t]*(?:[-*+][ \t]+)?(?:\[(?:{_NAV_WORDS})\]\([^)\n]*\)|(?:{_NAV_WORDS}))[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

_SOCIAL_LINE_RE = re.compile(
    r"^[ \t]*(?:follow us(?: on [\w ]+)?|share(?: this(?: page| post| article)?)?|like|tweet|"
    r"pin it|facebook|twitter|instagram|linkedin|youtube|tiktok|folgen sie uns|teilen)"
    r"[ \t]*[:!.]?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# Legal boilerplate: everything after the marker on that line goes too.
_LEGAL_LINE_RE = re.compile(
    r"^[ \t]*(?:copyright|©|all rights reserved|terms of service|terms & conditions|"
    r"privacy policy|alle rechte vorbehalten|datenschutzerklärung).*$",
    re.IGNORECASE | re.MULTILINE,
)

# Short plain-text lines only, so a single-line HTML document survives.
_COOKIE_LINE_RE = re.compile(
    r"^[^\n<]{0,200}(?:this (?:web)?site uses cookies|we use cookies|accept (?:all )?cookies|"
    r"cookie (?:policy|settings|preferences)|wir verwenden cookies|"
    r"diese website verwendet cookies)[^\n<]{0,200}$",
    re.IGNORECASE | re.MULTILINE,
)

# Openers of markup that never carries FAQ content; "<!--" opens a comment.
_NOISE_OPEN_RE = re.compile(
    r"<(?:!--|(script|style|noscript|nav|footer)\b[^<>]*>)", re.IGNORECASE
)
_COMMENT_CLOSE_RE = re.compile(r"-->")
_NOISE_CLOSE_RES = {
    name: re.compile(rf"</{name}\s*>", re.IGNORECASE)
    for name in ("script", "style", "noscript", "nav", "footer")
}

# Cloudflare e-mail obfuscation leftovers, e.g. "[email protected]"
_EMAIL_PLACEHOLDER_RE = re.compile(
    r"\[email(?:\s|\xa0|&#160;|&nbsp;)protected\]", re.IGNORECASE
)

_EXCESS_NEWLINES_RE = re.compile(r"\n(?:[ \t]*\n){2,}")


def _cut_noise_blocks(text: str) -> str:
    """Cut comments and noise elements in one left-to-right pass.

    An opener without a closer stays in place.  Once a closer is known to be
    missing it is not searched for again, which keeps the pass linear.
    """
    parts = []
    pos = 0
    missing = set()
    for match in _NOISE_OPEN_RE.finditer(text):
        if match.start() < pos:
            continue
        name = (match.group(1) or "!--").lower()
        if name in missing:
            continue
        close_re = _NOISE_CLOSE_RES.get(name, _COMMENT_CLOSE_RE)
        close = close_re.search(text, match.end())
        if close is None:
            missing.add(name)
            continue
        parts.append(text[pos:match.start()])
        pos = close.end()
    parts.append(text[pos:])
    return "".join(parts)


def _normalize_once(text: str) -> str:
    text = _EMAIL_PLACEHOLDER_RE.sub("", _cut_noise_blocks(text))
    for pattern in (_NAV_LINE_RE, _SOCIAL_LINE_RE, _LEGAL_LINE_RE, _COOKIE_LINE_RE):
        text = pattern.sub("", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def normalize(raw: str) -> str:
    """Strip navigation and boilerplate noise from *raw* page content.

    The result is never longer than the input and a second pass removes
    nothing further.
    """
    if not raw:
        return ""
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    # A cut can splice a new opener together ("<scr<script></script>ipt>"),
    # so repeat until nothing changes.
    while True:
        cleaned = _normalize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")
_MD_LINK_RE = re.compile(r"!?\[([^\]\n]*)\]\([^)\n]*\)")
_MD_EMPHASIS_RE = re.compile(r"\*\*|__")
_MD_HEADING_RE = re.compile(r"^[ \t]*#{1,6}[ \t]*", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")


def strip_tags(text: str) -> str:
    """Return the plain text of *text*, dropping any HTML tags it contains."""
    if not _TAG_RE.search(text):
        return html.unescape(text)
    return BeautifulSoup(text, "lxml").get_text(" ")


def clean_text(text: str) -> str:
    """Reduce a question or answer fragment to trimmed plain text.

    Drops HTML tags, decodes entities, unwraps markdown links, removes
    emphasis and heading markers and collapses whitespace.
    """
    if not text:
        return ""
    cleaned = strip_tags(text)
    cleaned = _MD_LINK_RE.sub(r"\1", cleaned)
    cleaned = _MD_HEADING_RE.sub("", cleaned)
    cleaned = _MD_EMPHASIS_RE.sub("", cleaned)
    cleaned = cleaned.replace("\xa0", " ")
    return _WHITESPACE_RE.sub(" ", cleaned).strip()
