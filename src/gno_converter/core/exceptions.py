class ConversionError(Exception):
    """Base exception for a failed conversion."""


class TransportError(ConversionError):
    """Raised when a compression container is corrupt, empty, or undecodable."""


class FormatValidationError(ConversionError):
    """Raised when a decoded payload is not usable XML."""


class UnsupportedOptionError(ConversionError):
    """Raised when a conversion option names a capability that does not exist."""
