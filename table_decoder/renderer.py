"""
Grid rendering of coordinate-tagged records.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO, Tuple
import math
import sys

from .cells import classify, is_numeric
from .errors import NoRenderableDataError
from .structures import Record
from .utils import setup_logger


logger = setup_logger(__name__)


DEFAULT_X_FIELD = "x-coordinate"
DEFAULT_Y_FIELD = "y-coordinate"
DEFAULT_CHAR_FIELD = "Character"


def coerce_coordinate(value: Any) -> Optional[int]:
    """
    Integral grid coordinate from a record value.

    Accepts numbers and numeric text (records normalized with formatted
    values keep coordinates as strings). Returns None otherwise.
    """
    if isinstance(value, str):
        value = classify(value).value
    if not is_numeric(value) or math.isinf(value):
        return None
    if value != int(value):
        return None
    return int(value)


def display_char(value: Any) -> str:
    """Text placed in a grid cell; empty string means nothing to place."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if is_numeric(value) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if is_numeric(value) and value == int(value):
        return str(int(value))
    return str(value)


class GridRenderer:
    """Renders records as rows of characters, highest y first."""

    def __init__(self, x_field: str = DEFAULT_X_FIELD,
                 y_field: str = DEFAULT_Y_FIELD,
                 char_field: str = DEFAULT_CHAR_FIELD,
                 blank: str = ' '):
        """
        Initialize renderer.

        Args:
            x_field: Record key holding the x-coordinate
            y_field: Record key holding the y-coordinate
            char_field: Record key holding the display character
            blank: Filler for cells with no record
        """
        self.x_field = x_field
        self.y_field = y_field
        self.char_field = char_field
        self.blank = blank

    @classmethod
    def from_config(cls, config) -> 'GridRenderer':
        return cls(x_field=config.x_field, y_field=config.y_field, char_field=config.char_field)

    def _points(self, records: Iterable[Record]) -> List[Tuple[int, int, str]]:
        points = []
        ignored = 0
        for record in records:
            x = coerce_coordinate(record.get(self.x_field))
            y = coerce_coordinate(record.get(self.y_field))
            if x is None or y is None:
                ignored += 1
                continue
            points.append((x, y, display_char(record.get(self.char_field))))
        if ignored:
            logger.debug(f"Ignored {ignored} record(s) without usable coordinates")
        return points

    def bounds(self, records: Iterable[Record]) -> Tuple[int, int]:
        """
        Maximum x and y across records.

        Raises:
            NoRenderableDataError: no record has usable coordinates
        """
        return self._bounds(self._points(records))

    @staticmethod
    def _bounds(points: List[Tuple[int, int, str]]) -> Tuple[int, int]:
        if not points:
            raise NoRenderableDataError()
        return max(p[0] for p in points), max(p[1] for p in points)

    def build_index(self, records: Iterable[Record]) -> Tuple[Dict[Tuple[int, int], str], int, int]:
        """
        Map (x, y) to the first non-empty character placed there.

        Returns:
            (index, max_x, max_y)

        Raises:
            NoRenderableDataError: no record has usable coordinates
        """
        points = self._points(records)
        max_x, max_y = self._bounds(points)

        index: Dict[Tuple[int, int], str] = {}
        for x, y, char in points:
            if char and (x, y) not in index:
                index[(x, y)] = char
        return index, max_x, max_y

    def render(self, records: Iterable[Record]) -> Iterator[str]:
        """
        Render records to lines, top row (highest y) first.

        Bounds are computed immediately so an empty record set fails here
        rather than on first iteration.

        Args:
            records: Records exposing coordinate and character fields

        Returns:
            Iterator over printed rows

        Raises:
            NoRenderableDataError: no record has usable coordinates
        """
        index, max_x, max_y = self.build_index(records)
        logger.debug(f"Rendering grid of {max_x + 1}x{max_y + 1} from {len(index)} point(s)")
        return self._iter_lines(index, max_x, max_y)

    def _iter_lines(self, index: Dict[Tuple[int, int], str], max_x: int, max_y: int) -> Iterator[str]:
        for y in range(max_y, -1, -1):
            yield ''.join(index.get((x, y), self.blank) for x in range(max_x + 1))

    def render_text(self, records: Iterable[Record]) -> str:
        """Rendered grid as a single newline-joined string."""
        return '\n'.join(self.render(records))

    def write(self, records: Iterable[Record], stream: Optional[TextIO] = None) -> int:
        """
        Write one line per grid row to stream (stdout by default).

        Returns:
            Number of lines written
        """
        stream = stream or sys.stdout
        count = 0
        for line in self.render(records):
            stream.write(line + '\n')
            count += 1
        return count


def render(records: Iterable[Record], x_field: str = DEFAULT_X_FIELD,
           y_field: str = DEFAULT_Y_FIELD, char_field: str = DEFAULT_CHAR_FIELD) -> Iterator[str]:
    """Render records with a default-configured GridRenderer."""
    return GridRenderer(x_field, y_field, char_field).render(records)
