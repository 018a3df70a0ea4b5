"""Exceptions raised by the codec.

Every error is fatal at the point it is detected; the pipeline aborts and
the caller gets the exception. Nothing is retried.
"""


class HuffmanError(Exception):
    pass


class IOFailure(HuffmanError, OSError):
    """Source could not be read or sink could not be written."""


class MissingCodeError(HuffmanError, KeyError):
    """A symbol has no entry in the code table."""

    def __init__(self, symbol: int) -> None:
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self) -> str:
        return f"no code for symbol {self.symbol} (0x{self.symbol:02x})"


class StructuralCorruptionError(HuffmanError, ValueError):
    """Code paths do not form a binary tree, or the bitstream is damaged."""


class MalformedTableError(HuffmanError, ValueError):
    """The persisted header cannot be parsed."""


class Cancelled(HuffmanError):
    """Encoding or decoding was stopped by its should_stop callback."""
