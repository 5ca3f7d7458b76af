"""
Record completeness validation.
Flags extracted listings whose fields came back mostly empty.
"""

import logging
from typing import Dict, Iterable, List

from .core.models import RecordValidation, WatchRecord

logger = logging.getLogger(__name__)


class RecordValidator:
    """Checks extracted records for field coverage."""

    def __init__(self, min_fill_ratio: float = 0.5):
        """Initialize validator with the minimum share of populated fields."""
        self.min_fill_ratio = min_fill_ratio

    def validate_record(self, record: WatchRecord) -> RecordValidation:
        """
        Validate a single record.

        Args:
            record: Extracted WatchRecord

        Returns:
            RecordValidation with populated/total field counts
        """
        populated = 0
        total = 0
        missing_groups: List[str] = []

        for group_name, group in record.groups().items():
            group_populated = group.populated_count()
            populated += group_populated
            total += len(group.field_names())
            if group_populated == 0:
                missing_groups.append(group_name)

        ratio = populated / total if total else 0.0
        return RecordValidation(
            url=record.url,
            populated_fields=populated,
            total_fields=total,
            is_valid=ratio >= self.min_fill_ratio,
            missing_groups=missing_groups,
        )

    def validate_all(self, records: Iterable[WatchRecord]) -> Dict[str, List[RecordValidation]]:
        """
        Validate all records.

        Returns:
            Dictionary with validation results categorized
        """
        results: Dict[str, List[RecordValidation]] = {"valid": [], "invalid": []}

        for record in records:
            result = self.validate_record(record)
            if result.is_valid:
                results["valid"].append(result)
                logger.debug(f"VALID: {result.url} ({result.fill_ratio:.0%} filled)")
            else:
                results["invalid"].append(result)
                logger.warning(
                    f"SPARSE: {result.url} ({result.populated_fields}/"
                    f"{result.total_fields} fields, missing: "
                    f"{', '.join(result.missing_groups) or 'none'})"
                )

        self._print_summary(results)
        return results

    def _print_summary(self, results: Dict[str, List[RecordValidation]]) -> None:
        """Print validation summary."""
        valid_count = len(results["valid"])
        invalid_count = len(results["invalid"])
        total = valid_count + invalid_count

        logger.info("=" * 60)
        logger.info("VALIDATION SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total records: {total}")
        logger.info(f"Complete enough: {valid_count}")
        logger.info(f"Sparse: {invalid_count}")

        if total > 0:
            logger.info(f"Coverage rate: {valid_count / total * 100:.1f}%")
