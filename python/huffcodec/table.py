"""Container header holding the code table.

Layout, all integers big endian::

    b"HUF"                  magic
    u8                      format version
    u64                     number of bytes in the original input
    u16                     number of table entries (0..256)
    entries:
        u8                  symbol
        u8                  code length in bits (1..255)
        ceil(bits / 8) B    code, packed MSB first, zero padded

The packed bitstream follows the last entry. Because the original length
is stored, the decoder knows where the real data ends and never decodes
the padding of the final byte.
"""
import struct
from typing import BinaryIO

from huffcodec.abc import CodeTable
from huffcodec.errors import MalformedTableError

MAGIC = b"HUF"
FORMAT_VERSION = 1
MAX_CODE_BITS = 255

_PREAMBLE = struct.Struct(">3sBQ")
_COUNT = struct.Struct(">H")


def pack_code(code: str) -> bytes:
    nbits = len(code)
    padded = code + "0" * (-nbits % 8)
    return bytes(int(padded[i:i + 8], 2) for i in range(0, len(padded), 8))


def unpack_code(packed: bytes, nbits: int) -> str:
    bits = "".join(format(b, "08b") for b in packed)
    if "1" in bits[nbits:]:
        raise MalformedTableError(f"non-zero padding in packed code {packed.hex()}")
    return bits[:nbits]


def dump_table(table: CodeTable) -> bytes:
    out = bytearray(_COUNT.pack(len(table)))
    for symbol in sorted(table):
        code = table[symbol]
        assert 0 <= symbol <= 255, f"symbol out of range: {symbol}"
        assert 1 <= len(code) <= MAX_CODE_BITS, f"bad code length for {symbol}: {code!r}"
        out.append(symbol)
        out.append(len(code))
        out += pack_code(code)
    return bytes(out)


def write_header(sink: BinaryIO, table: CodeTable, length: int) -> int:
    """Write magic, version, length and table. Returns the bytes written."""
    head = _PREAMBLE.pack(MAGIC, FORMAT_VERSION, length) + dump_table(table)
    sink.write(head)
    return len(head)


def _read_exact(source: BinaryIO, n: int, what: str) -> bytes:
    data = source.read(n)
    if len(data) != n:
        raise MalformedTableError(
            f"truncated header while reading {what}: wanted {n} bytes, got {len(data)}"
        )
    return data


def load_table(source: BinaryIO) -> CodeTable:
    """Inverse of dump_table: read the entry count and the entries."""
    (count,) = _COUNT.unpack(_read_exact(source, _COUNT.size, "entry count"))
    if count > 256:
        raise MalformedTableError(f"too many table entries: {count}")

    table: CodeTable = {}
    for i in range(count):
        symbol, nbits = _read_exact(source, 2, f"entry {i}")
        if symbol in table:
            raise MalformedTableError(f"duplicate entry for symbol {symbol}")
        if nbits == 0:
            raise MalformedTableError(f"zero-length code for symbol {symbol}")
        packed = _read_exact(source, (nbits + 7) // 8, f"code of symbol {symbol}")
        table[symbol] = unpack_code(packed, nbits)
    return table


def read_header(source: BinaryIO) -> tuple[CodeTable, int]:
    """Parse a header written by write_header. Returns (table, length)."""
    magic, version, length = _PREAMBLE.unpack(
        _read_exact(source, _PREAMBLE.size, "preamble")
    )
    if magic != MAGIC:
        raise MalformedTableError(f"bad magic {magic!r}, expected {MAGIC!r}")
    if version != FORMAT_VERSION:
        raise MalformedTableError(f"unsupported format version {version}")

    table = load_table(source)
    if len(table) == 0 and length > 0:
        raise MalformedTableError(f"empty table for {length} bytes of data")
    return table, length
