import contextlib
import os
from typing import BinaryIO, Callable, Iterator

import fire  # noqa

from huffcodec.errors import HuffmanError, IOFailure
from huffcodec.huffman import Huffman


@contextlib.contextmanager
def _open(path: str, mode: str) -> Iterator[BinaryIO]:
    try:
        f = open(path, mode)
    except OSError as e:
        raise IOFailure(f"cannot open {path}: {e.strerror or e}") from e
    with f:
        yield f


def _run_file_to_file(
    src: str, dst: str, step: Callable[[BinaryIO, BinaryIO], None]
) -> None:
    # The destination is removed again if anything fails, so a failed run
    # never leaves a half-written file behind.
    with _open(src, "rb") as fin:
        # Opening dst for writing would truncate src before it is read
        if os.path.exists(dst) and os.path.samefile(src, dst):
            raise IOFailure(f"source and destination are the same file: {src}")
        created = False
        try:
            try:
                with _open(dst, "wb") as fout:
                    created = True
                    step(fin, fout)
            except OSError as e:
                if isinstance(e, HuffmanError):
                    raise
                raise IOFailure(f"I/O error on {src} -> {dst}: {e}") from e
        except BaseException:
            if created:
                with contextlib.suppress(FileNotFoundError):
                    os.remove(dst)
            raise


def compress_file(src: str, dst: str, codec: Huffman | None = None) -> None:
    codec = codec or Huffman()
    _run_file_to_file(src, dst, lambda fin, fout: codec.compress_to(fin.read(), fout))


def decompress_file(src: str, dst: str, codec: Huffman | None = None) -> None:
    codec = codec or Huffman()
    _run_file_to_file(src, dst, codec.decompress_from)


def compress(source: str, destination: str, progress: bool = False, verbose: bool = False) -> None:
    """Compress SOURCE into DESTINATION."""
    try:
        compress_file(source, destination, Huffman(progress=progress, verbose=verbose))
    except HuffmanError as e:
        print(f"Error occurred: {e}")
        return
    if verbose:
        in_size = os.path.getsize(source)
        out_size = os.path.getsize(destination)
        print(f"{source}: {in_size} bytes -> {destination}: {out_size} bytes")


def decompress(source: str, destination: str, progress: bool = False, verbose: bool = False) -> None:
    """Decompress SOURCE, written by compress, into DESTINATION."""
    try:
        decompress_file(source, destination, Huffman(progress=progress, verbose=verbose))
    except HuffmanError as e:
        print(f"Error occurred: {e}")


def compress_main() -> None:
    fire.Fire(compress)


def decompress_main() -> None:
    fire.Fire(decompress)
