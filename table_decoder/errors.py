"""
Exceptions raised by the table decoding pipeline.
"""


class TableDecodeError(Exception):
    """Base class for table decoding errors."""


class NoRenderableDataError(TableDecodeError):
    """Raised when a record set holds no point that can be placed on a grid."""
    
    def __init__(self, message: str = "No renderable data: record set has no usable coordinates"):
        super().__init__(message)
