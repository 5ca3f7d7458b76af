"""
File I/O helpers for scraper output.

Results are written as pretty-printed UTF-8 JSON. A batch can additionally be
flattened into a CSV with one row per listing.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

logger = logging.getLogger(__name__)


def write_json_file(
    data: Any, file_path: Union[str, Path], indent: int = 4
) -> None:
    """
    Write data to JSON file with error handling.

    Key order is preserved so output diffs cleanly between runs.

    Parameters:
    ----------
    data : Any
        Data to write
    file_path : str or Path
        Output file path
    indent : int
        JSON indentation level
    """
    file_path = Path(file_path)

    # Create parent directories if they don't exist
    file_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
        logger.debug(f"Successfully wrote JSON: {file_path}")
    except (OSError, TypeError) as e:
        raise ValueError(f"Failed to write JSON {file_path}: {str(e)}")


def flatten_records(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """Flatten nested listing records into one row each, with dotted column names."""
    if not records:
        return pd.DataFrame()
    return pd.json_normalize(records, sep=".")


def safe_write_csv_with_backup(df: pd.DataFrame, file_path: Union[str, Path], **kwargs) -> bool:
    """
    Write CSV file with backup and error recovery.

    Creates a backup of existing file before writing, and restores on failure.

    Parameters:
    ----------
    df : pd.DataFrame
        DataFrame to write
    file_path : str or Path
        Output file path
    **kwargs
        Additional arguments passed to df.to_csv

    Returns:
    -------
    bool
        True if write succeeded, False otherwise
    """
    file_path = Path(file_path)
    backup_path = file_path.with_suffix(f"{file_path.suffix}.bak")

    file_path.parent.mkdir(parents=True, exist_ok=True)

    backup_created = False
    if file_path.exists():
        try:
            shutil.copy2(file_path, backup_path)
            backup_created = True
            logger.debug(f"Created backup: {backup_path}")
        except OSError as exc:
            logger.warning(f"Failed to create backup for {file_path}: {exc}")

    try:
        df.to_csv(file_path, **kwargs)
        logger.debug(f"Successfully wrote CSV: {file_path} ({len(df)} rows)")

        if backup_created and backup_path.exists():
            backup_path.unlink()

        return True

    except OSError as exc:
        logger.error(f"Failed to write CSV {file_path}: {exc}")

        if backup_created and backup_path.exists():
            try:
                shutil.move(backup_path, file_path)
                logger.info(f"Restored backup for {file_path}")
            except OSError as restore_error:
                logger.error(f"Failed to restore backup: {restore_error}")

        return False


def write_records_csv(records: List[Dict[str, Any]], file_path: Union[str, Path]) -> bool:
    """Write a flattened CSV of listing records."""
    df = flatten_records(records)
    if df.empty:
        logger.warning(f"No records to write to {file_path}")
        return False
    return safe_write_csv_with_backup(df, file_path, index=False, encoding="utf-8")
