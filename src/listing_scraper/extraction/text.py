"""
Text cleanup helpers for values pulled out of listing tables.
"""

import re
from typing import Callable, Dict, Optional, Tuple

_WHITESPACE_RE = re.compile(r"\s+")
_CASE_DIAMETER_RE = re.compile(r"^[0-9]+ mm")


def normalize_text(raw: Optional[str]) -> Optional[str]:
    """
    Collapse whitespace runs to single spaces and trim the result.

    Returns None for missing input or when nothing is left after trimming,
    so callers never see an empty string.
    """
    if raw is None:
        return None

    cleaned = _WHITESPACE_RE.sub(" ", raw).strip()
    return cleaned or None


def normalize_case_diameter(raw: Optional[str]) -> Optional[str]:
    """
    Keep only a leading "<digits> mm" token, e.g. "42 mm (44 mm lug-to-lug)" -> "42 mm".

    Values that do not start with that token yield None.
    """
    if raw is None:
        return None

    match = _CASE_DIAMETER_RE.match(raw)
    return match.group(0) if match else None


FieldNormalizer = Callable[[Optional[str]], Optional[str]]

# (group, field) -> post-processing applied after the generic text cleanup
FIELD_NORMALIZERS: Dict[Tuple[str, str], FieldNormalizer] = {
    ("case", "case_diameter"): normalize_case_diameter,
}


def get_field_normalizer(group: str, field_name: str) -> Optional[FieldNormalizer]:
    """Look up the field-specific normalizer registered for a group/field pair."""
    return FIELD_NORMALIZERS.get((group, field_name))
