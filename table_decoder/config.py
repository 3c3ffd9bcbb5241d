"""
Configuration settings for the table decoding pipeline.
"""

from dataclasses import dataclass, field
import math
import os

from .normalizer import NormalizeOptions
from .utils import env_float, env_int


def _valid_timeout(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _valid_port(value: int) -> bool:
    return 0 < value < 65536


@dataclass
class Config:
    """Central configuration for table decoding pipeline."""
    
    # Fetch settings
    request_timeout: float = field(
        default_factory=lambda: env_float("TABLE_DECODER_TIMEOUT", 30.0, _valid_timeout)
    )
    user_agent: str = "table-decoder/1.0"
    expected_content_type: str = "text/html"
    
    # Normalization settings
    prefer_formatted: bool = False
    prefer_formatted_dates: bool = False
    
    # Record fields consumed by the grid renderer
    x_field: str = "x-coordinate"
    y_field: str = "y-coordinate"
    char_field: str = "Character"
    
    # Markup extraction
    header_from_th: bool = True
    
    # Output settings
    save_csv: bool = False
    save_json: bool = False
    save_text: bool = False
    output_dir: str = "output"
    
    # API settings
    api_host: str = field(default_factory=lambda: os.environ.get("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: env_int("API_PORT", 5000, _valid_port))
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if not _valid_timeout(self.request_timeout):
            raise ValueError("request_timeout must be a positive finite number")
        if not self.x_field or not self.y_field or not self.char_field:
            raise ValueError("record field names must be non-empty")
        if len({self.x_field, self.y_field, self.char_field}) != 3:
            raise ValueError("x_field, y_field and char_field must be distinct")
        if not _valid_port(self.api_port):
            raise ValueError("api_port must be between 1 and 65535")
    
    def normalize_options(self):
        """Build the per-call options passed to the table normalizer."""
        return NormalizeOptions(
            prefer_formatted=self.prefer_formatted,
            prefer_formatted_dates=self.prefer_formatted_dates,
        )


# Default configuration instance
DEFAULT_CONFIG = Config()
