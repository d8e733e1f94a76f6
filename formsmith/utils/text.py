"""Text helpers shared by templates and elements."""

from __future__ import annotations

import html
import re
import unicodedata

_NON_WORD_RE = re.compile(r"[^\w]+")
_DASHES_RE = re.compile(r"-+")
_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")


def sanitize(value: object) -> str:
    """Escape a value for use inside HTML text or a quoted attribute."""

    return html.escape(str(value), quote=True)


def is_numeric(value: object) -> bool:
    """Return True for numbers and strings in any decimal/exponent numeric form."""

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return _NUMERIC_RE.fullmatch(value) is not None
    return False


def is_empty(value: object) -> bool:
    """Return True for None, empty strings and other falsy non-numeric values."""

    if value is None:
        return True
    if is_numeric(value):
        return False
    return not value


def slug(text: str) -> str:
    """Build a lowercase ASCII identifier joined by dashes."""

    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    ascii_text = _NON_WORD_RE.sub("-", ascii_text).replace("_", "-")
    ascii_text = _DASHES_RE.sub("-", ascii_text).strip("-").lower()
    return ascii_text or "n-a"
