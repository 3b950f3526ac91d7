"""text_cleaning

Public API (stable):
- decode_html_entities
- normalize_quotes
- clean_text

Notes:
- Functions are pure (no side effects) except for logging.
- Every table entry maps one code point to one code point, so text outside the
  table keeps its length and content.
- Composition uses `pipe()` for a declarative flow.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping, TypeVar

from ftfy.fixes import unescape_html

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------

PREVIEW_LEN = 100


def pipe(value: T, *funcs: Callable[[T], T]) -> T:
    """Left-to-right function composition for a single value."""
    for fn in funcs:
        value = fn(value)
    return value


def _preview(s: str, n: int = PREVIEW_LEN) -> str:
    """Return a safe preview slice for debug logs."""
    return repr(s[:n])


# ---------------------------------------------------------------------------
# Patterns & Constants
# ---------------------------------------------------------------------------

# Windows codepage 1252 quote bytes that survived decoding as C1 controls.
WINDOWS_1252_QUOTES: Mapping[str, str] = MappingProxyType(
    {
        "\x82": "'",  # single low-9 quotation mark
        "\x84": '"',  # double low-9 quotation mark
        "\x8b": "'",  # single left-pointing angle quotation mark
        "\x91": "'",  # left single quotation mark
        "\x92": "'",  # right single quotation mark
        "\x93": '"',  # left double quotation mark
        "\x94": '"',  # right double quotation mark
        "\x9b": "'",  # single right-pointing angle quotation mark
    }
)

SMART_QUOTES: Mapping[str, str] = MappingProxyType(
    {
        "«": '"',  # left-pointing double angle quotation mark
        "»": '"',  # right-pointing double angle quotation mark
        "‘": "'",  # left single quotation mark
        "’": "'",  # right single quotation mark
        "‚": "'",  # single low-9 quotation mark
        "‛": "'",  # single high-reversed-9 quotation mark
        "“": '"',  # left double quotation mark
        "”": '"',  # right double quotation mark
        "„": '"',  # double low-9 quotation mark
        "‟": '"',  # double high-reversed-9 quotation mark
        "‹": "'",  # single left-pointing angle quotation mark
        "›": "'",  # single right-pointing angle quotation mark
    }
)

QUOTE_TRANSLATION = str.maketrans({**WINDOWS_1252_QUOTES, **SMART_QUOTES})


# ---------------------------------------------------------------------------
# Quote normalization
# ---------------------------------------------------------------------------


def decode_html_entities(text: str) -> str:
    """Decode HTML entities (``&quot;``, ``&#8220;``...) to characters."""
    return unescape_html(text) if "&" in text else text


def normalize_quotes(text: str) -> str:
    """Map typographic and legacy quote characters to ``'`` or ``"``."""
    return text.translate(QUOTE_TRANSLATION) if text else text


def clean_text(text: str) -> str:
    """Decode entities, then canonicalize quotes."""
    logger.debug(f"clean_text called with {len(text)} chars")
    logger.debug(f"Input text preview: {_preview(text)}")
    result = pipe(text, decode_html_entities, normalize_quotes)
    logger.debug(f"Output text preview: {_preview(result)}")
    return result
