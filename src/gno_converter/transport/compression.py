"""
Compression framing around GNO payloads.

Detection is by magic bytes only:
    gzip  1F 8B
    zlib  78 01 / 78 9C / 78 DA
    zip   50 4B 03 04  (the first file entry is the payload)
Anything else is taken to be UTF-8 text already.
"""

from __future__ import annotations

import gzip as gzip_codec
import io
import zipfile
import zlib
from pathlib import Path
from typing import Union

from gno_converter.core.exceptions import (
    FormatValidationError,
    TransportError,
    UnsupportedOptionError,
)
from gno_converter.logging import get_logger

log = get_logger(__name__)

Binary = Union[bytes, bytearray, memoryview]
GnoSource = Union[Binary, str, Path]

GZIP_MAGIC = b"\x1f\x8b"
ZLIB_FLAGS = (0x01, 0x9C, 0xDA)
ZIP_MAGIC = b"PK\x03\x04"


# -----------------------------------------------------------------------------
# Detection
# -----------------------------------------------------------------------------

def is_gzip(data: Binary) -> bool:
    return bytes(data[:2]) == GZIP_MAGIC


def is_zlib(data: Binary) -> bool:
    head = bytes(data[:2])
    return len(head) == 2 and head[0] == 0x78 and head[1] in ZLIB_FLAGS


def is_zip(data: Binary) -> bool:
    return bytes(data[:4]) == ZIP_MAGIC


# -----------------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------------

def _decode_utf8(payload: bytes, origin: str, error=TransportError) -> str:
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise error(f"{origin} payload is not valid UTF-8: {exc}") from exc


def _first_zip_entry(data: bytes) -> bytes:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            entries = [info for info in archive.infolist() if not info.is_dir()]
            if not entries:
                raise TransportError("zip archive contains no file entries")
            first = entries[0]
            log.debug("Extracting first zip entry: %s", first.filename)
            return archive.read(first)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as exc:
        raise TransportError(f"corrupt zip archive: {exc}") from exc


def decompress_to_text(data: Binary) -> str:
    """
    Convert a possibly-compressed buffer to text.

    Raises TransportError for a corrupt container or non-UTF-8 payload.
    """
    raw = bytes(data)

    if is_gzip(raw):
        log.debug("Detected gzip payload (%d bytes)", len(raw))
        try:
            return _decode_utf8(gzip_codec.decompress(raw), "gzip")
        except (OSError, EOFError, zlib.error) as exc:
            raise TransportError(f"corrupt gzip stream: {exc}") from exc

    if is_zlib(raw):
        log.debug("Detected zlib payload (%d bytes)", len(raw))
        try:
            return _decode_utf8(zlib.decompress(raw), "zlib")
        except zlib.error as exc:
            raise TransportError(f"corrupt zlib stream: {exc}") from exc

    if is_zip(raw):
        log.debug("Detected zip payload (%d bytes)", len(raw))
        return _decode_utf8(_first_zip_entry(raw), "zip")

    return _decode_utf8(raw, "raw", error=FormatValidationError)


def looks_like_xml(text: str) -> bool:
    return text.lstrip().startswith("<")


def read_gno_xml(source: GnoSource) -> str:
    """
    Read a .gno file or buffer and return its XML text.

    ``source`` is either the raw bytes or a filesystem path. Raises
    FormatValidationError when the decoded payload does not start with '<'.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        log.info("Reading GNO file: %s", path)
        data = path.read_bytes()
    else:
        data = bytes(source)

    text = decompress_to_text(data)

    if not looks_like_xml(text):
        raise FormatValidationError(
            ".gno payload does not look like XML (first non-whitespace character is not '<')"
        )
    return text


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------

def compress(data: Binary, *, gzip: bool = False, zip: bool = False) -> bytes:
    """
    Optionally wrap ``data`` in a compression container.

    - gzip=True -> gzip stream
    - zip=True  -> UnsupportedOptionError (zip output is not implemented)
    - neither   -> bytes unchanged
    """
    raw = bytes(data)

    if gzip:
        out = gzip_codec.compress(raw, mtime=0)
        log.debug("gzip: %d -> %d bytes", len(raw), len(out))
        return out

    if zip:
        raise UnsupportedOptionError(
            "ZIP output is not implemented; use gzip compression or uncompressed output"
        )

    return raw
