from gno_converter.core.context import ConversionContext
from gno_converter.core.exceptions import (
    ConversionError,
    FormatValidationError,
    TransportError,
    UnsupportedOptionError,
)

__all__ = [
    "ConversionContext",
    "ConversionError",
    "FormatValidationError",
    "TransportError",
    "UnsupportedOptionError",
]
