import io
from typing import BinaryIO, Callable

import tqdm  # noqa

from huffcodec.abc import CodeTable, Compressor
from huffcodec.bitio import EOF, BitReader, BitWriter
from huffcodec.errors import Cancelled, MissingCodeError, StructuralCorruptionError
from huffcodec.frequency import count_frequencies
from huffcodec.table import read_header, write_header
from huffcodec.tree import NIL, HuffmanTree, build_tree, generate_codes, reconstruct_tree

CHUNK_SIZE = 1 << 16  # decoder output is written to the sink in blocks of this size

StopCheck = Callable[[], bool]


def ch(x: int) -> str:
    if 32 <= x < 127:
        return chr(x)
    elif x == ord("\n"):
        return "\\n"
    return "<?>"


def encode(
    data: bytes,
    table: CodeTable,
    writer: BitWriter,
    *,
    should_stop: StopCheck | None = None,
    progress: bool = False,
) -> None:
    for s in tqdm.tqdm(data, desc="Encoding", disable=not progress):
        code = table.get(s)
        if code is None:
            raise MissingCodeError(s)
        if should_stop is None:
            writer.write_bits(code)
            continue
        for c in code:
            if should_stop():
                raise Cancelled(f"encoding stopped after {writer.bits_written} bits")
            writer.write_bits(c)
    writer.close()


def decode(
    reader: BitReader,
    tree: HuffmanTree,
    length: int,
    sink: BinaryIO,
    *,
    should_stop: StopCheck | None = None,
    progress: bool = False,
) -> None:
    out = bytearray()
    current = tree.root
    produced = 0

    with tqdm.tqdm(total=length, desc="Decoding", disable=not progress) as pbar:
        while produced < length:
            if should_stop is not None and should_stop():
                raise Cancelled(f"decoding stopped after {produced} of {length} bytes")

            bit = reader.read_bit()
            if bit == EOF:
                raise StructuralCorruptionError(
                    f"bitstream ended after {produced} of {length} bytes"
                )
            current = tree.child(current, bit)
            if current == NIL:
                raise StructuralCorruptionError(
                    f"no branch for bit {bit} at bit offset {reader.bits_read - 1}"
                )

            node = tree.nodes[current]
            if node.is_leaf:
                assert node.symbol is not None
                out.append(node.symbol)
                produced += 1
                pbar.update(1)
                current = tree.root
                if len(out) >= CHUNK_SIZE:
                    sink.write(out)
                    out = bytearray()

    if out:
        sink.write(out)

    if reader.skip_padding() != 0:
        raise StructuralCorruptionError("non-zero padding after the last symbol")
    if reader.read_bit() != EOF:
        raise StructuralCorruptionError("unexpected data after the last symbol")


class Huffman(Compressor):
    """Static Huffman coding of byte strings.

    compress() output is a header (see huffcodec.table) followed by the
    packed bitstream; decompress() only needs that output.
    """

    def __init__(
        self,
        *,
        progress: bool = False,
        verbose: bool = False,
        should_stop: StopCheck | None = None,
    ) -> None:
        self.progress = progress
        self.verbose = verbose
        self.should_stop = should_stop
        self.table: CodeTable = {}

    def compress(self, data: bytes) -> bytes:
        buf = io.BytesIO()
        self.compress_to(data, buf)
        return buf.getvalue()

    def decompress(self, blob: bytes) -> bytes:
        buf = io.BytesIO()
        self.decompress_from(io.BytesIO(blob), buf)
        return buf.getvalue()

    def compress_to(self, data: bytes, sink: BinaryIO) -> None:
        assert type(data) is bytes or type(data) is bytearray
        freqs = count_frequencies(data)
        if len(freqs) == 0:
            self.table = {}
            write_header(sink, self.table, 0)
            return

        tree = build_tree(freqs)
        self.table = generate_codes(tree)

        if self.verbose:
            print("Alphabet:", list(freqs))
            print("Total Frequency:", len(data))
            for s, f in freqs.items():
                print(f"  {s:3d} {ch(s):>4} freq={f} code={self.table[s]}")

        write_header(sink, self.table, len(data))
        encode(
            data,
            self.table,
            BitWriter(sink),
            should_stop=self.should_stop,
            progress=self.progress,
        )

    def decompress_from(self, source: BinaryIO, sink: BinaryIO) -> None:
        self.table, length = read_header(source)
        if self.verbose:
            print("Alphabet:", sorted(self.table))
            print("Data length:", length)

        tree = reconstruct_tree(self.table)
        decode(
            BitReader(source),
            tree,
            length,
            sink,
            should_stop=self.should_stop,
            progress=self.progress,
        )
