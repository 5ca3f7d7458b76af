"""
Label-based value lookup inside a located section.
"""

from typing import Optional

from bs4 import Tag

from .text import normalize_text

LABEL_TAG = "strong"


def extract_field(section: Optional[Tag], label: str) -> Optional[str]:
    """
    Find the row labelled with ``label`` and return its last cell's text.

    The label is matched as a case-sensitive substring of the emphasized label
    text. The first matching row wins. Returns None when the section is missing,
    no row carries the label, or the value cell is blank.
    """
    if section is None:
        return None

    row = _find_labelled_row(section, label)
    if row is None:
        return None

    cells = row.find_all("td")
    if not cells:
        return None

    return normalize_text(cells[-1].get_text())


def _find_labelled_row(section: Tag, label: str) -> Optional[Tag]:
    for label_element in section.find_all(LABEL_TAG):
        if label not in label_element.get_text():
            continue

        row = label_element.find_parent("tr")
        if row is not None and any(parent is section for parent in row.parents):
            return row

    return None
