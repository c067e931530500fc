import re

from bs4 import BeautifulSoup, Comment, Tag

# Matches `display:none` or `visibility:hidden` in inline style attributes
_HIDDEN_STYLE_RE = re.compile(
    r"(display\s*:\s*none|visibility\s*:\s*hidden)", re.IGNORECASE
)

# Tags whose entire subtree should be removed (non-content / scripting)
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "object",
    "embed",
    "link",
    "meta",
    "svg",
    "canvas",
    "template",
}

# Page chrome, removed unless it wraps an FAQ widget (ASP.NET pages put the
# whole body inside one <form>)
_CHROME_TAGS = {"nav", "footer", "aside", "form"}

_JUNK_ATTRS = re.compile(r"^(style|on\w+)$", re.IGNORECASE)

# CSS classes / ids that strongly indicate non-content elements.  Matched
# against whole "-"/"_"-separated segments, so "menu" hits "main-menu" but
# not "elementor-widget-container".
_NOISE_KEYWORDS = {
    "nav",
    "navbar",
    "navigation",
    "menu",
    "sidebar",
    "banner",
    "popup",
    "modal",
    "cookie",
    "gdpr",
    "advertisement",
    "footer",
    "breadcrumb",
    "breadcrumbs",
    "pagination",
    "social",
    "share",
    "newsletter",
    "subscribe",
    "promo",
    "comment",
    "comments",
    "search-form",
    "site-header",
}
_NOISE_RE = re.compile(
    r"(?:^|[-_])(?:"
    + "|".join(re.escape(k) for k in sorted(_NOISE_KEYWORDS, key=len, reverse=True))
    + r")(?:$|[-_])"
)

# Class / id fragments of FAQ widgets.  These win over noise keywords and
# keep collapsed panels that are hidden with inline CSS until clicked.
_FAQ_KEYWORDS = {
    "faq",
    "accordion",
    "toggle",
    "question",
    "answer",
    "collapse",
    "qa-",
}


def _attr_values(tag: Tag) -> list:
    values = []
    if tag.get("id"):
        values.append(str(tag["id"]).lower())
    for cls in tag.get("class", []):
        values.append(str(cls).lower())
    return values


def _is_noise(tag: Tag) -> bool:
    return any(_NOISE_RE.search(value) for value in _attr_values(tag))


def is_faq_element(tag: Tag) -> bool:
    """Return True for ``<details>``/``<summary>`` and FAQ/accordion-classed elements."""
    if tag.name in ("details", "summary"):
        return True
    return any(keyword in value for value in _attr_values(tag) for keyword in _FAQ_KEYWORDS)


def _inside_faq_element(tag: Tag) -> bool:
    return any(isinstance(parent, Tag) and is_faq_element(parent) for parent in tag.parents)


def _wraps_faq_element(tag: Tag) -> bool:
    return tag.find(is_faq_element) is not None


def sanitize(html: str) -> BeautifulSoup:
    """Remove page chrome from *html* and return the cleaned BeautifulSoup tree.

    FAQ widgets survive intact, including answer panels hidden with
    ``display:none`` and widgets sitting inside ``<form>``/``<aside>`` chrome.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for tag in soup.find_all(_CHROME_TAGS):
        if tag.decomposed or _wraps_faq_element(tag):
            continue
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        # Already removed together with a decomposed ancestor
        if not isinstance(tag, Tag) or tag.decomposed:
            continue
        protected = is_faq_element(tag) or _inside_faq_element(tag)
        if not protected and _is_noise(tag) and not _wraps_faq_element(tag):
            tag.decompose()
            continue
        inline_style = tag.get("style", "")
        if not protected and inline_style and _HIDDEN_STYLE_RE.search(inline_style):
            tag.decompose()
            continue
        junk = [attr for attr in tag.attrs if _JUNK_ATTRS.match(attr)]
        for attr in junk:
            del tag[attr]

    return soup
