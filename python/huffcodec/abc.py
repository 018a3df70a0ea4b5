from abc import ABC, abstractmethod
from typing import TypeAlias


# Symbol -> occurrence count
FrequencyMap: TypeAlias = dict[int, int]
# Symbol -> code bits, e.g. {97: "0", 98: "10"}
CodeTable: TypeAlias = dict[int, str]


class Compressor(ABC):
    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def decompress(self, blob: bytes) -> bytes:
        pass
