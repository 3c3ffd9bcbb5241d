"""
Table data structures shared by the extraction and normalization stages.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

from .cells import Cell, classify
from .utils import column_letter


Row = Tuple[Cell, ...]
Record = Dict[str, Any]


@dataclass(frozen=True)
class Column:
    """Column descriptor. ``label`` may be empty."""
    id: str
    label: str = ''


@dataclass(frozen=True)
class Table:
    """Rows of classified cells plus optional column labels."""
    rows: Tuple[Row, ...] = ()
    columns: Tuple[Column, ...] = field(default_factory=tuple)
    
    @property
    def has_labels(self) -> bool:
        return any(column.label for column in self.columns)
    
    @property
    def width(self) -> int:
        widths = [len(row) for row in self.rows]
        return max([len(self.columns)] + widths)
    
    @classmethod
    def from_texts(cls, rows: Sequence[Sequence[Any]], labels: Sequence[str] = ()) -> 'Table':
        """
        Build a table from raw cell texts, classifying every cell.
        
        ``None`` entries become empty cells.
        
        Args:
            rows: Raw cell texts, row by row
            labels: Optional column labels
            
        Returns:
            Table instance
        """
        built_rows = tuple(
            tuple(Cell(value=None) if text is None else classify(text) for text in row)
            for row in rows
        )
        columns = tuple(
            Column(id=column_letter(index), label=label or '')
            for index, label in enumerate(labels)
        )
        return cls(rows=built_rows, columns=columns)
