"""Polish postal-code normalization."""

import re

_NON_DIGIT_RE = re.compile(r"\D+")
_POSTAL_CODE_RE = re.compile(r"^\d{2}-\d{3}$")


def normalize_postal_code(raw: str | None) -> str | None:
    """Reformat a postal code to the national ``NN-NNN`` pattern.

    Args:
        raw: Free-text postal code, e.g. ``"00001"`` or ``" 00-001 "``.

    Returns:
        ``"NN-NNN"`` when the input holds exactly five digits, else None.
    """
    if not raw:
        return None
    digits = _NON_DIGIT_RE.sub("", raw)
    if len(digits) != 5:
        return None
    return f"{digits[:2]}-{digits[2:]}"


def is_valid_postal_code(raw: str | None) -> bool:
    """Whether ``raw`` is already in canonical ``NN-NNN`` form."""
    return bool(raw) and bool(_POSTAL_CODE_RE.match(raw.strip()))


def postal_code_candidates(raw: str | None) -> list[str]:
    """Query variants for a postal code: the input as given, then ``NN-NNN``.

    Empty values and duplicates are dropped, order is preserved.
    """
    stripped = (raw or "").strip()
    candidates: list[str] = []
    for value in (stripped, normalize_postal_code(stripped)):
        if value and value not in candidates:
            candidates.append(value)
    return candidates
