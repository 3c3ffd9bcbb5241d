"""
Cell classification: raw cell text to typed values.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union
import math
import re


CellValue = Union[float, str]

# Leading numeric prefix: optional sign, then Infinity or a decimal with optional exponent.
# Anything after the prefix is ignored ("12px" -> 12.0).
_NUMERIC_PREFIX_RE = re.compile(
    r'^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
)

_DATE_TEXT_RE = re.compile(
    r'^(?:'
    r'\d{4}[-/.]\d{1,2}[-/.]\d{1,2}'       # 2024-01-31, 2024/1/31
    r'|\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}'    # 01/31/2024, 31.01.24
    r')(?:[T ]\d{1,2}:\d{2}(?::\d{2})?)?$'
)

_GVIZ_DATE_RE = re.compile(r'^Date\(\s*\d+\s*,\s*\d+\s*(?:,\s*\d+\s*)*\)$')


@dataclass(frozen=True)
class Cell:
    """One table entry. ``formatted`` is only set for numeric values."""
    value: Optional[CellValue]
    formatted: Optional[str] = None
    
    def __post_init__(self):
        if self.formatted is not None and not is_numeric(self.value):
            raise ValueError("formatted is only allowed on numeric cells")
    
    @property
    def is_numeric(self) -> bool:
        return is_numeric(self.value)
    
    @property
    def is_empty(self) -> bool:
        return self.value is None


def is_numeric(value: Any) -> bool:
    """True for real numbers (bools excluded, NaN excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def parse_leading_number(text: str) -> Optional[float]:
    """
    Parse the longest numeric prefix of text.
    
    Args:
        text: Already trimmed text
        
    Returns:
        Parsed float, or None if text does not start with a number
    """
    match = _NUMERIC_PREFIX_RE.match(text)
    if not match:
        return None
    return float(match.group(0))


def classify(text: Any) -> Cell:
    """
    Classify raw cell text as numeric or textual.
    
    Numeric cells keep the trimmed source text in ``formatted`` so leading
    zeros, units and separators survive. Never raises.
    
    Args:
        text: Raw cell text
        
    Returns:
        Cell with typed value
    """
    if text is None:
        text = ''
    elif not isinstance(text, str):
        text = str(text)
    
    trimmed = text.strip()
    number = parse_leading_number(trimmed)
    if number is None:
        return Cell(value=trimmed)
    return Cell(value=number, formatted=trimmed)


def is_date_like(value: Any, formatted: Optional[str] = None) -> bool:
    """
    Decide whether a cell holds a calendar date.
    
    A leading-prefix parse turns "2024-01-31" into 2024.0, so the display
    text is what carries the date.
    """
    if isinstance(value, date):
        return True
    for candidate in (formatted, value):
        if isinstance(candidate, str):
            candidate = candidate.strip()
            if _DATE_TEXT_RE.match(candidate) or _GVIZ_DATE_RE.match(candidate):
                return True
    return False
