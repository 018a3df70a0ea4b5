import io
import struct

import pytest  # noqa

from huffcodec.errors import MalformedTableError
from huffcodec.table import (
    FORMAT_VERSION,
    MAGIC,
    dump_table,
    load_table,
    pack_code,
    read_header,
    unpack_code,
    write_header,
)


def test_pack_code():
    assert pack_code("1") == b"\x80"
    assert pack_code("0") == b"\x00"
    assert pack_code("10101010") == b"\xaa"
    assert pack_code("101010101") == b"\xaa\x80"
    assert unpack_code(b"\xaa\x80", 9) == "101010101"


def test_unpack_code_rejects_padding():
    with pytest.raises(MalformedTableError):
        unpack_code(b"\x81", 1)


def test_dump_table_layout():
    blob = dump_table({98: "0", 97: "1"})
    assert blob == b"\x00\x02" + b"a\x01\x80" + b"b\x01\x00"


def test_load_table_reads_what_dump_table_wrote():
    table = {0: "110", 7: "0", 255: "10", 128: "111"}
    source = io.BytesIO(dump_table(table) + b"\xff")
    assert load_table(source) == table
    assert source.read() == b"\xff"


@pytest.mark.parametrize(
    "blob",
    [
        b"\x00",
        b"\x01\x01",  # 257 entries
        b"\x00\x01c",
    ],
)
def test_load_table_malformed(blob: bytes):
    with pytest.raises(MalformedTableError):
        load_table(io.BytesIO(blob))


def test_long_code_entry():
    code = "1" * 254 + "0"
    sink = io.BytesIO()
    write_header(sink, {3: code, 4: "1" * 255}, 2)
    table, length = read_header(io.BytesIO(sink.getvalue()))
    assert table == {3: code, 4: "1" * 255}
    assert length == 2


def test_header_roundtrip_stops_at_bitstream():
    table = {10: "00", 11: "01", 12: "1"}
    sink = io.BytesIO()
    n = write_header(sink, table, 1234)
    sink.write(b"\xde\xad")
    assert n == len(sink.getvalue()) - 2

    source = io.BytesIO(sink.getvalue())
    assert read_header(source) == (table, 1234)
    assert source.read() == b"\xde\xad"


def test_empty_table():
    sink = io.BytesIO()
    write_header(sink, {}, 0)
    assert sink.getvalue() == MAGIC + bytes([FORMAT_VERSION]) + b"\x00" * 10
    assert read_header(io.BytesIO(sink.getvalue())) == ({}, 0)


def _header(count: int, length: int = 1, magic: bytes = MAGIC, version: int = FORMAT_VERSION) -> bytes:
    return magic + struct.pack(">BQH", version, length, count)


@pytest.mark.parametrize(
    "blob",
    [
        b"",
        b"HU",
        _header(1, magic=b"ZIP"),
        _header(1, version=9),
        _header(257),
        _header(0, length=5),
        _header(1),  # entry missing
        _header(1) + b"a",  # length byte missing
        _header(1) + b"a\x09\xff",  # second code byte missing
        _header(1) + b"a\x00",
        _header(2) + b"a\x01\x00" + b"a\x01\x80",
    ],
)
def test_malformed_headers(blob: bytes):
    with pytest.raises(MalformedTableError):
        read_header(io.BytesIO(blob))
