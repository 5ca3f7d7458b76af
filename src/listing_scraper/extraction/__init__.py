"""
Extraction engine for listing pages: section lookup, label matching and
field normalization.
"""

from .assembler import assemble_record, extract_title
from .document import narrow_html, parse_document
from .fields import extract_field
from .sections import FirstTableBody, HeadingMarker, locate_section
from .text import normalize_case_diameter, normalize_text

__all__ = [
    "assemble_record",
    "extract_title",
    "narrow_html",
    "parse_document",
    "extract_field",
    "FirstTableBody",
    "HeadingMarker",
    "locate_section",
    "normalize_case_diameter",
    "normalize_text",
]
