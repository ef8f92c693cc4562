"""
Text utilities for handling French/English spreadsheet headers.

Used to turn raw column names into comparable tokens.
"""

import re
import unicodedata
from typing import Any

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9]")
_REPEATED_UNDERSCORES = re.compile(r"_+")


def strip_accents(text: str) -> str:
    """
    Remove accent marks, keeping the base letter.

    - "Numéro Série" → "Numero Serie"
    - "Ça coûte" → "Ca coute"
    """
    # NFD decomposition separates base chars from accents
    normalized = unicodedata.normalize('NFD', text)

    # Remove accent marks (combining characters in Unicode category 'Mn')
    return ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )


def normalize_header(header: Any) -> str:
    """
    Canonicalize a header into a comparable token.

    Lowercases, trims, drops accents, replaces anything outside [a-z0-9]
    with "_", collapses repeated "_" and strips them at both ends:
    - "N° Série" → "n_serie"
    - "  Date d'achat " → "date_d_achat"
    - "RAM (Go)" → "ram_go"

    Args:
        header: Raw header (non-strings are stringified, None is empty)

    Returns:
        Normalized token, empty string for empty input
    """
    if header is None:
        return ""

    text = strip_accents(str(header).strip().lower())
    text = _NON_TOKEN_CHARS.sub("_", text)
    text = _REPEATED_UNDERSCORES.sub("_", text)
    return text.strip("_")


def header_tokens(normalized: str) -> list[str]:
    """Split a normalized header into its "_"-separated tokens."""
    return [token for token in normalized.split("_") if token]
