from .compression import (
    compress,
    decompress_to_text,
    is_gzip,
    is_zip,
    is_zlib,
    looks_like_xml,
    read_gno_xml,
)

__all__ = [
    "compress",
    "decompress_to_text",
    "is_gzip",
    "is_zip",
    "is_zlib",
    "looks_like_xml",
    "read_gno_xml",
]
