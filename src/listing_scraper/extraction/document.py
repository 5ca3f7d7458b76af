"""
HTML document parsing for listing pages.

Pages are parsed with BeautifulSoup's built-in parser. Because that parser
keeps rows exactly where the markup puts them, rows written directly under
``<table>`` are moved into a synthesized ``<tbody>`` so that table-body lookups
behave the same as against a browser DOM.
"""

import logging
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

PARSER = "html.parser"


def parse_document(html: Optional[str]) -> BeautifulSoup:
    """Parse raw page HTML into a document with explicit table bodies."""
    soup = BeautifulSoup(html or "", PARSER)
    _insert_implicit_tbody(soup)
    return soup


def _insert_implicit_tbody(soup: BeautifulSoup) -> None:
    """Wrap rows that are direct children of a table in a new tbody."""
    for table in soup.find_all("table"):
        rows = table.find_all("tr", recursive=False)
        if not rows:
            continue

        tbody = soup.new_tag("tbody")
        rows[0].insert_before(tbody)
        for row in rows:
            tbody.append(row.extract())

        logger.debug(f"Wrapped {len(rows)} bare row(s) in an implicit tbody")


def narrow_html(html: Optional[str], include_tags: Iterable[str]) -> str:
    """
    Reduce a page to the outermost elements whose tag is in ``include_tags``.

    Elements are kept in document order; an element nested inside another
    kept element is not repeated.
    """
    wanted = {tag.lower() for tag in include_tags}
    if not html or not wanted:
        return html or ""

    soup = BeautifulSoup(html, PARSER)
    kept: List[Tag] = []
    for element in soup.find_all(sorted(wanted)):
        if any(parent.name in wanted for parent in element.parents):
            continue
        kept.append(element)

    return "\n".join(str(element) for element in kept)
