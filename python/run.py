import fire  # noqa

from huffcodec.abc import Compressor
from huffcodec.frequency import count_frequencies
from huffcodec.huffman import Huffman


def main(in_file: str, progress: bool = True, verbose: bool = False):
    with open(in_file, "rb") as f:
        data = f.read()

    comp: Compressor = Huffman(progress=progress, verbose=verbose)

    encoded: bytes = comp.compress(data)
    decoded: bytes = comp.decompress(encoded)

    print("\nDecoding process:")

    if data == decoded:
        print("Data successfully encoded and decoded!")
        print("Alphabet size:", len(count_frequencies(data)))
        print("Data length: ", len(data), "symbols")
        print(f"Encoded length: {len(encoded)} bytes = {len(encoded) * 8} bits")  # noqa
        if len(data) > 0:
            print(f"Compression rate: {len(data) / len(encoded):.2f}x")
    else:
        print("Error: decoded data does not match original!")
        print(f"Original data: {len(data)} {data[:20]!r}...")
        print(f"Decoded data:  {len(decoded)} {decoded[:20]!r}...")
        raise RuntimeError(
            f"Decoded data does not match original! {data!r} != {decoded!r}"
        )


if __name__ == "__main__":
    fire.Fire(main)
