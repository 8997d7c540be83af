from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

log = logging.getLogger(__name__)

ALPHABET_SIZE = 256

# sotto questa soglia il thread pool costa più del conteggio
MIN_CHUNK = 64 * 1024


@dataclass(frozen=True)
class FrequencyTable:
    """Occurrences of each byte value (0..255) in an input.

    Entries with count 0 are treated as absent. ``total`` always equals the
    length of the input the table was counted from.
    """

    counts: tuple[int, ...] = (0,) * ALPHABET_SIZE

    def __post_init__(self) -> None:
        if len(self.counts) != ALPHABET_SIZE:
            raise ValueError(f"freq: expected {ALPHABET_SIZE} counts, got {len(self.counts)}")
        for f in self.counts:
            if f < 0:
                raise ValueError(f"freq: negative count {f}")

    @classmethod
    def from_counts(cls, counts: dict[int, int] | Sequence[int]) -> "FrequencyTable":
        """Build a table from a {symbol: count} mapping or a 256-long list."""
        if isinstance(counts, dict):
            arr = [0] * ALPHABET_SIZE
            for sym, f in counts.items():
                sym = _check_symbol(sym)
                arr[sym] = int(f)
            return cls(tuple(arr))
        return cls(tuple(int(f) for f in counts))

    def __getitem__(self, sym: int) -> int:
        return self.counts[sym]

    def items(self) -> Iterator[tuple[int, int]]:
        """Nonzero (symbol, count) pairs, ascending by symbol."""
        for sym, f in enumerate(self.counts):
            if f > 0:
                yield sym, f

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def distinct(self) -> int:
        return sum(1 for f in self.counts if f > 0)

    def merge(self, other: "FrequencyTable") -> "FrequencyTable":
        return FrequencyTable(tuple(a + b for a, b in zip(self.counts, other.counts)))


def _check_symbol(sym: int) -> int:
    if not isinstance(sym, int) or sym < 0 or sym >= ALPHABET_SIZE:
        raise ValueError(f"symbol out of range 0..{ALPHABET_SIZE - 1}: {sym!r}")
    return sym


def _count(data: Iterable[int]) -> list[int]:
    freq = [0] * ALPHABET_SIZE
    if isinstance(data, (bytes, bytearray, memoryview)):
        for b in data:
            freq[b] += 1
        return freq
    for s in data:
        freq[_check_symbol(s)] += 1
    return freq


def count_frequencies(data: bytes | Iterable[int], jobs: int = 1) -> FrequencyTable:
    """Count each symbol of ``data``.

    With ``jobs > 1`` and a large enough bytes input, contiguous chunks are
    counted on a thread pool and summed; the result is the same table the
    sequential count produces.
    """
    jobs = max(1, int(jobs))
    if jobs == 1 or not isinstance(data, (bytes, bytearray, memoryview)) or len(data) < 2 * MIN_CHUNK:
        return FrequencyTable(tuple(_count(data)))

    view = memoryview(data)
    step = max(MIN_CHUNK, -(-len(view) // jobs))
    chunks = [view[i : i + step] for i in range(0, len(view), step)]
    log.debug("counting %d bytes in %d chunks (jobs=%d)", len(view), len(chunks), jobs)

    out = FrequencyTable()
    with ThreadPoolExecutor(max_workers=jobs) as ex:
        for part in ex.map(_count, chunks):
            out = out.merge(FrequencyTable(tuple(part)))
    return out
