"""
Export of decoded records and rendered grids.
"""

from typing import List, Sequence
import json

import pandas as pd

from .structures import Record
from .utils import setup_logger


logger = setup_logger(__name__)


def records_to_dataframe(records: Sequence[Record], header: Sequence[str] = ()) -> pd.DataFrame:
    """
    Convert records to a DataFrame.

    Args:
        records: Normalized records
        header: Optional column order; keys outside it are appended

    Returns:
        DataFrame with one row per record (missing keys are NaN)
    """
    columns: List[str] = list(header)
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    return pd.DataFrame(list(records), columns=columns)


def save_csv(records: Sequence[Record], output_path: str, header: Sequence[str] = ()):
    """
    Save records to CSV.

    Args:
        records: Normalized records
        output_path: Output file path
        header: Optional column order
    """
    try:
        records_to_dataframe(records, header).to_csv(output_path, index=False, encoding='utf-8')
        logger.debug(f"Saved CSV to {output_path}")
    except Exception as e:
        logger.error(f"Failed to save CSV: {e}")


def save_json(records: Sequence[Record], output_path: str):
    """
    Save records to JSON.

    Args:
        records: Normalized records
        output_path: Output file path
    """
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(list(records), f, ensure_ascii=False, indent=2)
        logger.debug(f"Saved JSON to {output_path}")
    except Exception as e:
        logger.error(f"Failed to save JSON: {e}")


def save_text(lines: Sequence[str], output_path: str):
    """Save rendered grid lines to a text file."""
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            for line in lines:
                f.write(line + '\n')
        logger.debug(f"Saved text to {output_path}")
    except Exception as e:
        logger.error(f"Failed to save text: {e}")
