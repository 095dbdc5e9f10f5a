from .xref import fallback_id, format_pointer, strip_pointer

__all__ = [
    "fallback_id",
    "format_pointer",
    "strip_pointer",
]
