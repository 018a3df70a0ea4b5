import pytest  # noqa

from huffcodec.abc import Compressor
from huffcodec.huffman import Huffman


_comp_algos = [
    Huffman,
]
_data = [
    b"",
    b"hello, huffman! hello, huffman! hello, huffman!",
    b"a",
    b"a" * 1000,
    b"ab",
    b"aaab",
    b"abcde" * 500,
    bytes(range(256)),
    bytes(range(256)) * 3 + b"\x00" * 100,
    bytes((i * 7919) % 251 for i in range(5000)),
]


@pytest.mark.parametrize("algorithm_class", _comp_algos)
@pytest.mark.parametrize("data", _data)
def test_main(algorithm_class: type[Compressor], data: bytes):
    assert type(data) is bytes
    encoded: bytes = algorithm_class().compress(data)

    assert type(encoded) is bytes
    assert encoded[:3] == b"HUF", "has magic"

    decoded: bytes = algorithm_class().decompress(encoded)
    assert type(decoded) is bytearray or type(decoded) is bytes
    assert data == decoded


@pytest.mark.parametrize("n", [1, 7, 8, 9, 4096])
def test_single_symbol_repeated(n: int):
    data = b"Z" * n
    comp = Huffman()
    encoded = comp.compress(data)
    assert comp.table == {ord("Z"): "0"}
    # one bit per symbol, rounded up to whole bytes
    assert encoded.endswith(b"\x00" * ((n + 7) // 8))
    assert Huffman().decompress(encoded) == data


def test_skewed_input_is_smaller():
    data = b"a" * 10000 + b"b" * 100 + b"c" * 10
    encoded = Huffman().compress(data)
    assert len(encoded) < len(data) // 4
