"""
Section lookup for listing pages.

Listing pages carry no machine-readable section ids. A section is located
either as the first table body on the page or through a heading whose text
contains a marker phrase, taking the table body that encloses the heading.
"""

from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

SECTION_HEADING_TAG = "h3"


@dataclass(frozen=True)
class FirstTableBody:
    """Select the first table body in document order."""


@dataclass(frozen=True)
class HeadingMarker:
    """Select the table body enclosing the first heading that contains ``marker``."""
    marker: str
    heading_tag: str = SECTION_HEADING_TAG


SectionSelector = Union[FirstTableBody, HeadingMarker]


def locate_section(document: BeautifulSoup, selector: SectionSelector) -> Optional[Tag]:
    """
    Return the table body selected by ``selector``, or None when absent.

    Args:
        document: Parsed listing page
        selector: FirstTableBody or HeadingMarker

    Returns:
        The matching tbody element or None
    """
    if isinstance(selector, FirstTableBody):
        return document.find("tbody")

    if isinstance(selector, HeadingMarker):
        heading = _find_heading(document, selector)
        if heading is None:
            return None
        return heading.find_parent("tbody")

    raise TypeError(f"Unsupported section selector: {selector!r}")


def _find_heading(document: BeautifulSoup, selector: HeadingMarker) -> Optional[Tag]:
    for heading in document.find_all(selector.heading_tag):
        if selector.marker in heading.get_text():
            return heading
    return None
