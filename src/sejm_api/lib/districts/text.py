"""Key normalization for administrative names.

Every district index is keyed by ``normalize()`` output so lookups are
insensitive to case, diacritics, hyphenation and stray whitespace.
"""

import re
import unicodedata

# Letters with a stroke have no canonical decomposition under NFD
_STROKE_LETTERS = str.maketrans({"ł": "l", "Ł": "l", "đ": "d", "Đ": "d", "ø": "o", "Ø": "o"})

_WHITESPACE_RE = re.compile(r"\s+")

_POLISH_ALPHABET = "aąbcćdeęfghijklłmnńoópqrsśtuvwxyzźż"
# Letters remapped above U+00FF so they order after spaces, digits and punctuation
_POLISH_RANK = {letter: chr(0x100 + i) for i, letter in enumerate(_POLISH_ALPHABET)}


def normalize(text: str | None) -> str:
    """Canonicalize free text for use as a lookup key.

    Lowercases, strips diacritics, turns hyphens into spaces and collapses
    whitespace. ``normalize(normalize(x)) == normalize(x)``.

    Args:
        text: Raw administrative name (county, city, voivodeship, person).

    Returns:
        The canonical key, or an empty string for ``None``.
    """
    if not text:
        return ""
    lowered = str(text).lower().translate(_STROKE_LETTERS)
    decomposed = unicodedata.normalize("NFD", lowered)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _WHITESPACE_RE.sub(" ", stripped.replace("-", " ")).strip()


def collation_key(text: str | None) -> str:
    """Sort key following the Polish alphabet, ignoring case.

    Polish letters with diacritics are letters of their own that sort right
    after their base (``l < ł < m``); other accents are ignored.
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFC", str(text).lower().replace("-", " "))
    folded = _WHITESPACE_RE.sub(" ", folded).strip()
    key = []
    for char in folded:
        if char in _POLISH_RANK:
            key.append(_POLISH_RANK[char])
            continue
        base = "".join(c for c in unicodedata.normalize("NFD", char) if not unicodedata.combining(c))
        key.extend(_POLISH_RANK.get(c, c) for c in base)
    return "".join(key)
