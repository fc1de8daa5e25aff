"""Input validation and sanitization utilities."""

import re
import unicodedata

from app.core.errors import InvalidInputError

# Control characters to remove (except newline, tab, carriage return)
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# Multiple whitespace pattern
MULTI_WHITESPACE_PATTERN = re.compile(r"\s+")

MAX_QUERY_LENGTH = 200


def normalize_width(text: str) -> str:
    """
    Fold full-width and half-width forms onto one canonical form.

    NFKC maps full-width ASCII (``ＡＢＣ１２３``) to plain ASCII, half-width
    katakana (``ｶﾀｶﾅ``) to full-width katakana, and the ideographic space to
    a regular space.
    """
    return unicodedata.normalize("NFKC", text)


def sanitize_query(text: str | None) -> str:
    """
    Normalize raw search text for substring matching and cache keys.

    - Removes control characters
    - Folds width variants (see ``normalize_width``)
    - Collapses runs of whitespace and trims the ends

    Raises InvalidInputError if nothing is left. Applying it twice gives
    the same result as applying it once.
    """
    if text is None:
        raise InvalidInputError("Expected ?q param")

    text = CONTROL_CHAR_PATTERN.sub("", text)
    text = normalize_width(text)
    text = MULTI_WHITESPACE_PATTERN.sub(" ", text).strip()

    if not text:
        raise InvalidInputError("Expected ?q param")
    if len(text) > MAX_QUERY_LENGTH:
        raise InvalidInputError(f"Query must be at most {MAX_QUERY_LENGTH} characters")
    return text


def parse_flag(value: str | None) -> bool | None:
    """Interpret a ``0``/``1`` query flag; ``None`` means the filter is absent."""
    if value is None or value == "":
        return None
    return value == "1"
