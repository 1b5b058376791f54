"""Locale-tolerant text tokens.

Data entry mixes Turkish and ASCII spellings of the same word ("Çanta" /
"canta", "Kırmızı" / "kirmizi"). ``fold_token`` collapses those variants so
lookups compare equal regardless of case or diacritics.
"""

import unicodedata
from typing import Any


def clean_text(value: Any) -> str:
    """Return ``value`` as a stripped string (``None`` becomes ``""``)."""
    if value is None:
        return ""
    return str(value).strip()


def fold_token(value: Any) -> str:
    """Lowercase, strip diacritics and fold dotless ``ı`` to ``i``."""
    text = clean_text(value).casefold().replace("ı", "i")
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def compact_token(value: Any) -> str:
    """``fold_token`` with whitespace, dashes and underscores removed."""
    return "".join(ch for ch in fold_token(value) if ch.isalnum())
