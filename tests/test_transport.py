import gzip
import io
import zipfile
import zlib

import pytest

from gno_converter.core.exceptions import (
    FormatValidationError,
    TransportError,
    UnsupportedOptionError,
)
from gno_converter.transport import (
    compress,
    decompress_to_text,
    is_gzip,
    is_zip,
    is_zlib,
    read_gno_xml,
)

XML = '<?xml version="1.0" encoding="UTF-8"?>\n<GenoPro><Individuals/></GenoPro>\n'


def _zip(entries):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buf.getvalue()


def test_magic_byte_detection():
    assert is_gzip(gzip.compress(b"x"))
    assert is_zlib(zlib.compress(b"x"))
    assert is_zip(_zip([("a.xml", "x")]))
    assert not is_gzip(b"<x/>")
    assert not is_zlib(b"x")


@pytest.mark.parametrize(
    "wrap",
    [
        lambda data: data,
        gzip.compress,
        zlib.compress,
        lambda data: _zip([("tree.xml", data)]),
    ],
    ids=["raw", "gzip", "zlib", "zip"],
)
def test_compression_transparency(wrap):
    assert decompress_to_text(wrap(XML.encode("utf-8"))) == XML


def test_zip_skips_directory_entries():
    payload = _zip([("tree/", ""), ("tree/data.xml", XML)])
    assert decompress_to_text(payload) == XML


def test_bom_is_tolerated():
    assert read_gno_xml(b"\xef\xbb\xbf" + XML.encode("utf-8")).startswith("<?xml")


def test_read_gno_xml_from_path(tmp_path):
    path = tmp_path / "tree.gno"
    path.write_bytes(gzip.compress(XML.encode("utf-8")))
    assert read_gno_xml(path) == XML
    assert read_gno_xml(str(path)) == XML


def test_plain_text_is_rejected():
    with pytest.raises(FormatValidationError):
        read_gno_xml(b"invalid xml data")


def test_short_binary_is_rejected():
    with pytest.raises(FormatValidationError):
        read_gno_xml(bytes([1, 2, 3]))


def test_invalid_utf8_raw_is_format_error():
    with pytest.raises(FormatValidationError):
        decompress_to_text(b"<x>\xff\xfe</x>")


def test_corrupt_gzip_is_transport_error():
    with pytest.raises(TransportError):
        decompress_to_text(b"\x1f\x8b\x08\x00garbage")


def test_corrupt_zlib_is_transport_error():
    with pytest.raises(TransportError):
        decompress_to_text(b"\x78\x9cnot-deflate")


def test_zip_without_file_entries_is_transport_error():
    with pytest.raises(TransportError):
        decompress_to_text(_zip([("empty/", "")]))


def test_compress_gzip_round_trips():
    out = compress(XML.encode("utf-8"), gzip=True)
    assert is_gzip(out)
    assert gzip.decompress(out).decode("utf-8") == XML


def test_compress_gzip_is_deterministic():
    data = XML.encode("utf-8")
    assert compress(data, gzip=True) == compress(data, gzip=True)


def test_compress_passthrough():
    assert compress(b"<x/>") == b"<x/>"


def test_compress_zip_is_unsupported():
    with pytest.raises(UnsupportedOptionError):
        compress(b"<x/>", zip=True)
