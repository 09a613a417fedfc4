from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class FrequencyTable(Mapping[int, int]):
    """
    Tabella frequenze congelata: symbol (0-255) -> count (> 0).

    Entries are kept sorted by symbol value, so iteration order (and every
    artifact written from it) does not depend on how the table was built.
    """

    entries: tuple[tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for sym, f in self.entries:
            if not (0 <= sym <= 0xFF):
                raise ValueError(f"symbol out of range (0..255): {sym}")
            if sym in seen:
                raise ValueError(f"duplicate symbol in frequency table: {sym}")
            if f <= 0:
                raise ValueError(f"frequency must be positive: symbol={sym} freq={f}")
            seen.add(sym)
        object.__setattr__(self, "entries", tuple(sorted(self.entries)))

    @classmethod
    def from_symbols(cls, symbols: bytes) -> "FrequencyTable":
        freq = [0] * 256
        for b in symbols:
            freq[b] += 1
        return cls(tuple((sym, f) for sym, f in enumerate(freq) if f > 0))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> "FrequencyTable":
        return cls(tuple((int(sym), int(f)) for sym, f in pairs))

    def __getitem__(self, sym: int) -> int:
        for s, f in self.entries:
            if s == sym:
                return f
        raise KeyError(sym)

    def __iter__(self) -> Iterator[int]:
        return (s for s, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def total(self) -> int:
        """Number of symbols the table was counted from."""
        return sum(f for _, f in self.entries)
