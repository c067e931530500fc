"""Runtime settings for the extraction core and API (env-first, code-light)."""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Pages whose normalised content is shorter than this are skipped outright.
DEFAULT_MIN_CONTENT_LENGTH = 100
DEFAULT_LANGUAGE = "English"
# Upper bound on a single page's content accepted by the API.
DEFAULT_MAX_CONTENT_LENGTH = 50_000


@dataclass(frozen=True)
class ExtractionSettings:
    min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH
    default_language: str = DEFAULT_LANGUAGE
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    max_workers: int = 1


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive value for %s=%s; using default %s", key, raw, default)
        return default
    return value


def load_settings() -> ExtractionSettings:
    """Build :class:`ExtractionSettings` from ``FAQ_*`` environment variables."""
    return ExtractionSettings(
        min_content_length=_int_from_env("FAQ_MIN_CONTENT_LENGTH", DEFAULT_MIN_CONTENT_LENGTH),
        default_language=os.getenv("FAQ_DEFAULT_LANGUAGE", "").strip() or DEFAULT_LANGUAGE,
        max_content_length=_int_from_env("FAQ_MAX_CONTENT_LENGTH", DEFAULT_MAX_CONTENT_LENGTH),
        max_workers=_int_from_env("FAQ_MAX_WORKERS", 1),
    )
