"""
Main table decoding pipeline orchestrating all components.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union
from pathlib import Path

from .config import Config, DEFAULT_CONFIG
from .errors import NoRenderableDataError
from .exporters import save_csv, save_json, save_text
from .fetcher import DocumentFetcher
from .html_parser import TableMarkupParser
from .normalizer import NormalizeOptions, normalize
from .renderer import GridRenderer
from .structures import Record, Table
from .utils import setup_logger, ensure_dir


logger = setup_logger(__name__)


STATUS_OK = "ok"
STATUS_PARTIAL = "partial"
STATUS_NO_DATA = "no_data"
STATUS_NOTHING_TO_DISPLAY = "nothing_to_display"


@dataclass
class DecodeResult:
    """Container for one decoded document."""
    status: str
    records: List[Record] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)
    header: List[str] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def displayable(self) -> bool:
        return self.status in (STATUS_OK, STATUS_PARTIAL)

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)


class TableDecodePipeline:
    """
    Complete pipeline for decoding a published coordinate table.

    This pipeline:
    1. Fetches the document
    2. Extracts the first table
    3. Normalizes rows into records
    4. Renders the records as a character grid
    5. Saves results
    """

    def __init__(self, config: Optional[Config] = None,
                 fetcher: Optional[DocumentFetcher] = None):
        """
        Initialize decoding pipeline.

        Args:
            config: Configuration object (uses DEFAULT_CONFIG if None)
            fetcher: Optional document fetcher (built from config if None)
        """
        self.config = config or DEFAULT_CONFIG
        self.fetcher = fetcher or DocumentFetcher(self.config)
        self.markup_parser = TableMarkupParser(header_from_th=self.config.header_from_th)
        self.renderer = GridRenderer.from_config(self.config)
        logger.debug("Pipeline initialized")

    def decode(self, url: str, output_dir: Optional[Union[str, Path]] = None,
               options: Optional[NormalizeOptions] = None) -> DecodeResult:
        """
        Fetch a document and decode its table.

        Args:
            url: Document URL
            output_dir: Optional output directory for saving results
            options: Normalization options (from config if None)

        Returns:
            DecodeResult

        Raises:
            ValueError: url is empty
        """
        markup = self.fetcher.fetch(url)
        if markup is None:
            logger.warning(f"No data retrieved from {url}")
            return DecodeResult(status=STATUS_NO_DATA, source=url)

        result = self.decode_markup(markup, options=options)
        result.source = url

        if output_dir and result.displayable:
            self._save_results(result, output_dir)

        return result

    def decode_markup(self, markup: str, options: Optional[NormalizeOptions] = None) -> DecodeResult:
        """
        Decode the first table of already retrieved markup.

        Args:
            markup: Document markup
            options: Normalization options (from config if None)

        Returns:
            DecodeResult
        """
        table = self.markup_parser.parse(markup)
        if table is None:
            return DecodeResult(status=STATUS_NO_DATA)
        return self.decode_table(table, options=options)

    def decode_table(self, table: Table, options: Optional[NormalizeOptions] = None) -> DecodeResult:
        """
        Normalize and render a parsed table.

        Args:
            table: Parsed table
            options: Normalization options (from config if None)

        Returns:
            DecodeResult
        """
        options = options or self.config.normalize_options()
        normalized = normalize(table, options)
        result = DecodeResult(
            status=STATUS_NOTHING_TO_DISPLAY,
            records=normalized.records,
            header=normalized.header,
            skipped_rows=normalized.skipped_rows,
        )

        logger.info(f"Processed {len(normalized.records)} row(s)")

        try:
            result.lines = list(self.renderer.render(normalized.records))
        except NoRenderableDataError as e:
            logger.warning(f"Nothing to display: {e}")
            return result

        result.status = STATUS_PARTIAL if normalized.skipped_rows else STATUS_OK
        return result

    def _save_results(self, result: DecodeResult, output_dir: Union[str, Path]):
        """
        Save decoding results to directory.

        Args:
            result: Decoded document
            output_dir: Output directory path
        """
        output_dir = Path(output_dir)
        ensure_dir(str(output_dir))

        logger.info(f"Saving results to: {output_dir}")

        if self.config.save_csv:
            save_csv(result.records, str(output_dir / "records.csv"), header=result.header)
        if self.config.save_json:
            save_json(result.records, str(output_dir / "records.json"))
        if self.config.save_text:
            save_text(result.lines, str(output_dir / "message.txt"))
