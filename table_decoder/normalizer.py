"""
Table normalization: header inference and record building.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .cells import Cell, is_date_like
from .structures import Record, Row, Table
from .utils import setup_logger, column_letter


logger = setup_logger(__name__)


@dataclass(frozen=True)
class NormalizeOptions:
    """Per-call value resolution options."""
    prefer_formatted: bool = False
    prefer_formatted_dates: bool = False


@dataclass
class NormalizationResult:
    """Records produced from a table plus what had to be skipped."""
    records: List[Record] = field(default_factory=list)
    header: List[str] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)
    status: str = "empty"
    
    @property
    def is_partial(self) -> bool:
        return bool(self.skipped_rows) and bool(self.records)


DEFAULT_OPTIONS = NormalizeOptions()


def resolve_value(cell: Cell, options: NormalizeOptions) -> Any:
    """
    Pick the value a record stores for a cell.
    
    Args:
        cell: Classified cell (value must not be None)
        options: Resolution options
        
    Returns:
        Formatted text or raw value
    """
    if options.prefer_formatted and cell.formatted:
        return cell.formatted
    if (options.prefer_formatted_dates and cell.formatted
            and is_date_like(cell.value, cell.formatted)):
        return cell.formatted
    return cell.value


def infer_header(table: Table) -> tuple:
    """
    Determine column names and the rows that carry data.
    
    Labelled tables use their column labels. Otherwise the first row
    supplies the names and is dropped from the data rows.
    
    Args:
        table: Source table
        
    Returns:
        (header, data_rows)
    """
    if table.has_labels:
        return [column.label for column in table.columns], list(table.rows)
    
    if not table.rows:
        return [], []
    
    header_row, *data_rows = table.rows
    header = []
    for index, cell in enumerate(header_row):
        name = _header_name(cell)
        header.append(name if name is not None else column_letter(index))
    return header, data_rows


def _header_name(cell: Optional[Cell]) -> Optional[str]:
    if cell is None or cell.value is None:
        return None
    if cell.formatted is not None:
        return cell.formatted
    return str(cell.value)


def build_record(header: Sequence[str], row: Row, options: NormalizeOptions) -> Record:
    """
    Pair header names with row cells.
    
    Cells with a None value add no key; a short row adds fewer keys.
    """
    record: Record = {}
    for name, cell in zip(header, row):
        if cell is None or cell.value is None:
            continue
        record[name] = resolve_value(cell, options)
    return record


def normalize(table: Optional[Table], options: NormalizeOptions = DEFAULT_OPTIONS) -> NormalizationResult:
    """
    Convert a table into records, skipping rows that cannot be built.
    
    Args:
        table: Source table (None means no data)
        options: Value resolution options
        
    Returns:
        NormalizationResult with status ok, partial, empty or error
    """
    result = NormalizationResult()
    if table is None:
        return result
    
    try:
        header, data_rows = infer_header(table)
    except Exception as e:
        logger.error(f"Error parsing table header: {e}")
        result.status = "error"
        return result
    
    result.header = list(header)
    
    for index, row in enumerate(data_rows):
        try:
            result.records.append(build_record(header, row, options))
        except Exception as e:
            logger.debug(f"Skipping row {index}: {e}")
            result.skipped_rows.append(index)
    
    if result.skipped_rows:
        logger.warning(
            f"Skipped {len(result.skipped_rows)} malformed row(s) of {len(data_rows)}"
        )
    
    if result.records:
        result.status = "partial" if result.skipped_rows else "ok"
    elif result.skipped_rows:
        result.status = "error"
    else:
        result.status = "empty"
    
    return result


def to_records(table: Optional[Table], options: NormalizeOptions = DEFAULT_OPTIONS) -> List[Record]:
    """Records for a table; malformed input yields an empty list."""
    return normalize(table, options).records
