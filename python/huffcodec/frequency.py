from collections import Counter

from huffcodec.abc import FrequencyMap


def count_frequencies(data: bytes) -> FrequencyMap:
    assert type(data) is bytes or type(data) is bytearray
    counts = Counter(data)
    return {s: counts[s] for s in sorted(counts)}
