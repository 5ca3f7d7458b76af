"""
Data models for watch listing scraping.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


class _FieldGroup:
    """Shared helpers for the fixed-schema sub-records."""

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to dictionary representation, keeping declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def populated_count(self) -> int:
        return sum(1 for value in self.to_dict().values() if value is not None)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


@dataclass
class BasicInfo(_FieldGroup):
    """General listing details from the first table on the page."""
    listing_code: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    reference_number: Optional[str] = None
    dealer_product_code: Optional[str] = None
    movement: Optional[str] = None
    case_material: Optional[str] = None
    bracelet_material: Optional[str] = None
    year_of_production: Optional[str] = None
    condition: Optional[str] = None
    scope_of_delivery: Optional[str] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    price: Optional[str] = None
    availability: Optional[str] = None


@dataclass
class Caliber(_FieldGroup):
    """Movement details."""
    movement: Optional[str] = None
    caliber_movement: Optional[str] = None
    base_caliber: Optional[str] = None
    power_reserve: Optional[str] = None
    number_of_jewels: Optional[str] = None


@dataclass
class CaseInfo(_FieldGroup):
    """Case and dial details."""
    case_material: Optional[str] = None
    case_diameter: Optional[str] = None
    thickness: Optional[str] = None
    water_resistance: Optional[str] = None
    bezel_material: Optional[str] = None
    crystal: Optional[str] = None
    dial: Optional[str] = None
    dial_numerals: Optional[str] = None


@dataclass
class BraceletStrap(_FieldGroup):
    """Bracelet or strap details."""
    bracelet_material: Optional[str] = None
    bracelet_color: Optional[str] = None
    bracelet_length: Optional[str] = None
    lug_width: Optional[str] = None
    clasp: Optional[str] = None
    clasp_material: Optional[str] = None


@dataclass
class WatchRecord:
    """Structured data extracted from a single listing page."""
    url: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    basic_info: BasicInfo = field(default_factory=BasicInfo)
    caliber: Caliber = field(default_factory=Caliber)
    case: CaseInfo = field(default_factory=CaseInfo)
    bracelet_strap: BraceletStrap = field(default_factory=BraceletStrap)

    def groups(self) -> Dict[str, _FieldGroup]:
        return {
            "basic_info": self.basic_info,
            "caliber": self.caliber,
            "case": self.case,
            "bracelet_strap": self.bracelet_strap,
        }

    def to_dict(self, include_identity: bool = True) -> Dict[str, Any]:
        """
        Convert to the nested output shape.

        Args:
            include_identity: Include the top-level url, name and type keys.
                Single-page output leaves them out.
        """
        data: Dict[str, Any] = {}
        if include_identity:
            data["url"] = self.url
            data["name"] = self.name
            data["type"] = self.type

        for group_name, group in self.groups().items():
            data[group_name] = group.to_dict()

        return data


@dataclass
class CrawlBatch:
    """Records collected during one crawl run, in processing order."""
    records: List[WatchRecord] = field(default_factory=list)
    attempted: int = 0
    skip_reasons: List[Tuple[str, str]] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)

    def append(self, record: WatchRecord) -> None:
        self.records.append(record)

    def skip(self, url: str, reason: str) -> None:
        self.skip_reasons.append((url, reason))

    @property
    def skipped(self) -> int:
        return len(self.skip_reasons)

    def elapsed_seconds(self, now: Optional[datetime] = None) -> float:
        """Seconds since the run started."""
        return ((now or datetime.now()) - self.started_at).total_seconds()

    def __len__(self) -> int:
        return len(self.records)

    def to_list(self) -> List[Dict[str, Any]]:
        return [record.to_dict() for record in self.records]


@dataclass
class FetchOutcome:
    """Result of attempting a single listing URL: a record, or a skip reason."""
    url: str
    record: Optional[WatchRecord] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.record is not None


@dataclass
class RecordValidation:
    """Completeness check for one extracted record."""
    url: Optional[str]
    populated_fields: int
    total_fields: int
    is_valid: bool
    missing_groups: List[str] = field(default_factory=list)

    @property
    def fill_ratio(self) -> float:
        if self.total_fields == 0:
            return 0.0
        return self.populated_fields / self.total_fields
