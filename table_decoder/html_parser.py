"""
HTML table extraction and conversion to classified tables.
"""

from html.parser import HTMLParser as BaseHTMLParser
from typing import Dict, Any, List, Optional
import re

import pandas as pd

from .cells import Cell, classify
from .structures import Column, Table
from .utils import setup_logger, column_letter


logger = setup_logger(__name__)


_TABLE_OPEN_RE = re.compile(r'<table\b', re.IGNORECASE)
_TABLE_CLOSE_RE = re.compile(r'</table\s*>', re.IGNORECASE)

# Elements whose end implies a line break inside a cell
_BLOCK_TAGS = {'p', 'div', 'br', 'li'}


def extract_table_fragment(markup: str) -> Optional[str]:
    """
    Return the first <table>...</table> fragment of markup.

    Nested tables are kept whole: the fragment ends at the close tag that
    balances the first opening tag.

    Args:
        markup: Raw document markup

    Returns:
        Table markup or None if no table is present
    """
    if not markup:
        return None

    start = _TABLE_OPEN_RE.search(markup)
    if not start:
        return None

    depth = 0
    position = start.start()
    while True:
        next_open = _TABLE_OPEN_RE.search(markup, position)
        next_close = _TABLE_CLOSE_RE.search(markup, position)
        if next_close is None:
            logger.warning("Unterminated <table> in markup")
            return None
        if next_open is not None and next_open.start() < next_close.start():
            depth += 1
            position = next_open.end()
            continue
        depth -= 1
        position = next_close.end()
        if depth == 0:
            return markup[start.start():position]


class _TableTreeParser(BaseHTMLParser):
    """Collects rows of the first top-level table, cell text and spans."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.rows: List[List[Dict[str, Any]]] = []
        self.current_row: Optional[List[Dict[str, Any]]] = None
        self.current_cell: Optional[List[str]] = None
        self.cell_attrs: Dict[str, Any] = {}
        self.table_depth = 0
        self.done = False

    def handle_starttag(self, tag, attrs):
        if self.done:
            return
        attrs_dict = dict(attrs)
        if tag == 'table':
            self.table_depth += 1
        elif self.table_depth != 1:
            if tag == 'br' and self.current_cell is not None:
                self.current_cell.append('\n')
            return
        elif tag == 'tr':
            # </td> and </tr> are optional in HTML
            self._close_cell()
            self._close_row()
            self.current_row = []
        elif tag in ('td', 'th') and self.current_row is not None:
            self._close_cell()
            self.current_cell = []
            self.cell_attrs = {
                'header': tag == 'th',
                'rowspan': _span(attrs_dict.get('rowspan')),
                'colspan': _span(attrs_dict.get('colspan')),
            }
        elif tag == 'br' and self.current_cell is not None:
            self.current_cell.append('\n')

    def handle_endtag(self, tag):
        if self.done:
            return
        if tag == 'table':
            self.table_depth -= 1
            if self.table_depth == 0:
                self._close_cell()
                self._close_row()
                self.done = True
            return
        if self.table_depth != 1:
            if tag in _BLOCK_TAGS and self.current_cell is not None:
                self.current_cell.append('\n')
            return
        if tag == 'tr':
            self._close_cell()
            self._close_row()
        elif tag in ('td', 'th'):
            self._close_cell()
        elif tag in _BLOCK_TAGS and self.current_cell is not None:
            self.current_cell.append('\n')

    def handle_data(self, data):
        if self.current_cell is not None and self.table_depth == 1 and not self.done:
            self.current_cell.append(data)

    def _close_cell(self):
        if self.current_cell is None:
            return
        text = ' '.join(part.strip() for part in ''.join(self.current_cell).split('\n'))
        self.current_row.append({
            'text': text.strip(),
            'header': self.cell_attrs.get('header', False),
            'rowspan': self.cell_attrs.get('rowspan', 1),
            'colspan': self.cell_attrs.get('colspan', 1),
        })
        self.current_cell = None

    def _close_row(self):
        if self.current_row is None:
            return
        if self.current_row:
            self.rows.append(self.current_row)
        self.current_row = None


def _span(raw: Optional[str]) -> int:
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        return 1


class TableMarkupParser:
    """Parses the first HTML table of a document into a classified Table."""

    def __init__(self, header_from_th: bool = True):
        """
        Initialize markup parser.

        Args:
            header_from_th: Use a leading row of <th> cells as column labels
        """
        self.header_from_th = header_from_th

    def parse(self, markup: str) -> Optional[Table]:
        """
        Parse markup into a Table.

        Args:
            markup: Document or table markup

        Returns:
            Table, or None if no table is present or parsing fails
        """
        fragment = extract_table_fragment(markup)
        if fragment is None:
            logger.warning("No table found in markup")
            return None

        try:
            parser = _TableTreeParser()
            parser.feed(fragment)
            parser.close()
        except Exception as e:
            logger.error(f"Failed to parse table markup: {e}")
            return None

        if not parser.rows:
            logger.warning("Table has no rows")
            return Table()

        raw_rows = parser.rows
        labels: List[str] = []
        if self.header_from_th and all(cell['header'] for cell in raw_rows[0]):
            header_grid = self._expand_merged_cells(raw_rows[:1])
            labels = [text or '' for text in header_grid[0]]
            raw_rows = raw_rows[1:]

        grid = self._expand_merged_cells(raw_rows)
        rows = tuple(
            tuple(Cell(value=None) if text is None else classify(text) for text in row)
            for row in grid
        )
        columns = tuple(Column(id=column_letter(i), label=label) for i, label in enumerate(labels))

        logger.debug(f"Parsed table with {len(rows)} row(s), {len(columns)} label(s)")
        return Table(rows=rows, columns=columns)

    def _expand_merged_cells(self, table_data: List[List[Dict]]) -> List[List[Optional[str]]]:
        """
        Expand cells with rowspan/colspan into full grid.

        Positions no cell covers stay None, and trailing ones are trimmed so
        short rows stay short.

        Args:
            table_data: List of rows, each containing cell dictionaries

        Returns:
            2D list representing expanded table
        """
        if not table_data:
            return []

        max_cols = max(
            sum(cell.get('colspan', 1) for cell in row)
            for row in table_data
        )

        grid: List[List[Optional[str]]] = []
        filled: List[List[bool]] = []

        for row_idx, row in enumerate(table_data):
            while row_idx >= len(grid):
                grid.append([None] * max_cols)
                filled.append([False] * max_cols)

            col_idx = 0
            for cell in row:
                # Find next available column
                while col_idx < max_cols and filled[row_idx][col_idx]:
                    col_idx += 1

                if col_idx >= max_cols:
                    break

                text = cell.get('text', '')
                rowspan = cell.get('rowspan', 1)
                colspan = cell.get('colspan', 1)

                for r in range(rowspan):
                    row_pos = row_idx + r
                    # Spans never open rows past the end of the table
                    if row_pos >= len(table_data):
                        break
                    while row_pos >= len(grid):
                        grid.append([None] * max_cols)
                        filled.append([False] * max_cols)

                    for c in range(colspan):
                        col_pos = col_idx + c
                        if col_pos < max_cols:
                            grid[row_pos][col_pos] = text
                            filled[row_pos][col_pos] = True

                col_idx += colspan

        for row in grid:
            while row and row[-1] is None:
                row.pop()

        return grid


def table_to_dataframe(table: Optional[Table]) -> pd.DataFrame:
    """
    Raw cell values of a table as a DataFrame (for inspection).

    Args:
        table: Parsed table

    Returns:
        DataFrame; labelled tables use their labels as column names
    """
    if table is None or not table.rows:
        return pd.DataFrame()

    width = table.width
    data = [
        [cell.value for cell in row] + [None] * (width - len(row))
        for row in table.rows
    ]
    df = pd.DataFrame(data)
    if table.has_labels:
        labels = [column.label for column in table.columns]
        labels += [column_letter(i) for i in range(len(labels), width)]
        df.columns = labels[:width]
    return df
