"""
Assembly of a full WatchRecord from a parsed listing page.

Each field is looked up independently; a missing section or row only nulls
that field. Assembly never raises for malformed or partial pages.
"""

import copy
import logging
from typing import Dict, List, Optional, Tuple, Union

from bs4 import BeautifulSoup

from ..scraper.core.models import BasicInfo, BraceletStrap, Caliber, CaseInfo, WatchRecord
from .document import parse_document
from .fields import extract_field
from .sections import FirstTableBody, HeadingMarker, SectionSelector, locate_section
from .text import get_field_normalizer, normalize_text

logger = logging.getLogger(__name__)

TITLE_TAG = "h1"

SECTION_SELECTORS: Dict[str, SectionSelector] = {
    "basic_info": FirstTableBody(),
    "caliber": HeadingMarker("Caliber"),
    "case": HeadingMarker("Case"),
    "bracelet_strap": HeadingMarker("Bracelet/strap"),
}

# Output field name -> label text shown on the page
BASIC_INFO_LABELS: Dict[str, str] = {
    "listing_code": "Listing code",
    "brand": "Brand",
    "model": "Model",
    "reference_number": "Reference number",
    "dealer_product_code": "Dealer product code",
    "movement": "Movement",
    "case_material": "Case material",
    "bracelet_material": "Bracelet material",
    "year_of_production": "Year of production",
    "condition": "Condition",
    "scope_of_delivery": "Scope of delivery",
    "gender": "Gender",
    "location": "Location",
    "price": "Price",
    "availability": "Availability",
}

CALIBER_LABELS: Dict[str, str] = {
    "movement": "Movement",
    "caliber_movement": "Caliber/movement",
    "base_caliber": "Base caliber",
    "power_reserve": "Power reserve",
    "number_of_jewels": "Number of jewels",
}

CASE_LABELS: Dict[str, str] = {
    "case_material": "Case material",
    "case_diameter": "Case diameter",
    "thickness": "Thickness",
    "water_resistance": "Water resistance",
    "bezel_material": "Bezel material",
    "crystal": "Crystal",
    "dial": "Dial",
    "dial_numerals": "Dial numerals",
}

BRACELET_STRAP_LABELS: Dict[str, str] = {
    "bracelet_material": "Bracelet material",
    "bracelet_color": "Bracelet color",
    "bracelet_length": "Bracelet length",
    "lug_width": "Lug width",
    "clasp": "Clasp",
    "clasp_material": "Clasp material",
}

GROUP_LABELS: Dict[str, Dict[str, str]] = {
    "basic_info": BASIC_INFO_LABELS,
    "caliber": CALIBER_LABELS,
    "case": CASE_LABELS,
    "bracelet_strap": BRACELET_STRAP_LABELS,
}


def extract_title(document: BeautifulSoup) -> Tuple[Optional[str], Optional[str]]:
    """
    Split the page title heading into (name, type).

    The heading text is split on line breaks; blank pieces are dropped and
    missing pieces come back as None.
    """
    heading = document.find(TITLE_TAG)
    if heading is None:
        return None, None

    # Work on a copy so <br> handling does not touch the document
    heading = copy.copy(heading)
    for line_break in heading.find_all("br"):
        line_break.replace_with("\n")

    pieces: List[str] = []
    for line in heading.get_text().split("\n"):
        cleaned = normalize_text(line)
        if cleaned is not None:
            pieces.append(cleaned)

    name = pieces[0] if len(pieces) > 0 else None
    watch_type = pieces[1] if len(pieces) > 1 else None
    return name, watch_type


def extract_group(document: BeautifulSoup, group: str) -> Dict[str, Optional[str]]:
    """Extract every field of one group, applying field-specific normalizers."""
    section = locate_section(document, SECTION_SELECTORS[group])

    values: Dict[str, Optional[str]] = {}
    for field_name, label in GROUP_LABELS[group].items():
        value = extract_field(section, label)
        normalizer = get_field_normalizer(group, field_name)
        if normalizer is not None:
            value = normalizer(value)
        values[field_name] = value

    return values


def assemble_record(
    document: Union[BeautifulSoup, str, None], url: Optional[str] = None
) -> WatchRecord:
    """
    Build a WatchRecord from a listing page.

    Args:
        document: Parsed page, or raw HTML to parse
        url: Source URL, attached verbatim

    Returns:
        WatchRecord with every declared field present (None where absent)
    """
    if not isinstance(document, BeautifulSoup):
        document = parse_document(document)

    name, watch_type = extract_title(document)

    record = WatchRecord(
        url=url,
        name=name,
        type=watch_type,
        basic_info=BasicInfo(**extract_group(document, "basic_info")),
        caliber=Caliber(**extract_group(document, "caliber")),
        case=CaseInfo(**extract_group(document, "case")),
        bracelet_strap=BraceletStrap(**extract_group(document, "bracelet_strap")),
    )

    logger.debug(f"Assembled record for {url or '<single page>'} ({name} / {watch_type})")
    return record
