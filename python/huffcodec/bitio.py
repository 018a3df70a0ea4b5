from typing import BinaryIO, Iterator

EOF = -1


class BitWriter(object):
    """Packs bits MSB first into bytes written to `sink`.

    The last byte is padded with zero bits on flush(); the number of
    padding bits is not recorded anywhere.
    """

    def __init__(self, sink: BinaryIO) -> None:
        self.sink = sink
        self.acc = 0
        self.nbits = 0
        self.bits_written = 0
        self.closed = False

    def write_bit(self, bit: int) -> None:
        assert not self.closed, "write to a closed BitWriter"
        if bit not in (0, 1):
            raise ValueError(f"bit must be 0 or 1, got {bit!r}")
        self.acc = (self.acc << 1) | bit
        self.nbits += 1
        self.bits_written += 1
        if self.nbits == 8:
            self.sink.write(bytes((self.acc,)))
            self.acc = 0
            self.nbits = 0

    def write_bits(self, code: str) -> None:
        for c in code:
            if c == "0":
                self.write_bit(0)
            elif c == "1":
                self.write_bit(1)
            else:
                raise ValueError(f"invalid bit character {c!r} in {code!r}")

    def flush(self) -> None:
        if self.nbits > 0:
            self.sink.write(bytes((self.acc << (8 - self.nbits),)))
            self.acc = 0
            self.nbits = 0

    def close(self) -> None:
        if not self.closed:
            self.flush()
            self.closed = True

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class BitReader(object):
    """Yields the bits of `source` MSB first, one byte read at a time."""

    def __init__(self, source: BinaryIO) -> None:
        self.source = source
        self.byte = 0
        self.remaining = 0  # unread bits of self.byte
        self.bits_read = 0
        self.exhausted = False

    def read_bit(self) -> int:
        """Return the next bit, or EOF once the source has no more bytes."""
        if self.remaining == 0:
            if self.exhausted:
                return EOF
            b = self.source.read(1)
            if not b:
                self.exhausted = True
                return EOF
            self.byte = b[0]
            self.remaining = 8
        self.remaining -= 1
        self.bits_read += 1
        return (self.byte >> self.remaining) & 1

    def skip_padding(self) -> int:
        """Drop the unread bits of the current byte and return their value."""
        value = self.byte & ((1 << self.remaining) - 1)
        self.remaining = 0
        return value

    def __iter__(self) -> Iterator[int]:
        while (bit := self.read_bit()) != EOF:
            yield bit
