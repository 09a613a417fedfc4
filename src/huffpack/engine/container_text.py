"""Text artifact (the original tool's layout).

    <NUM_SYMS>\\n
    <SYM> <FREQ>\\n      (NUM_SYMS times, SYM is exactly one byte)
    <LASTBITS>\\n
    <PAYLOAD...>          (raw packed bytes up to end of file)

Numbers are ASCII decimal. Symbols are persisted after the sentinel layer,
so a space never appears literally. The reader is positional: it takes the
symbol byte verbatim, which keeps newline and digit symbols unambiguous.
"""

from __future__ import annotations

from huffpack.core.freq_table import FrequencyTable
from huffpack.engine.artifact import Artifact
from huffpack.errors import CorruptStream

FORMAT_TEXT = "text"


def pack_container_text(freq: FrequencyTable, lastbits: int, payload: bytes) -> bytes:
    out = bytearray()
    out += f"{len(freq)}\n".encode("ascii")
    for sym, f in freq.items():
        out.append(sym)
        out += f" {f}\n".encode("ascii")
    out += f"{lastbits}\n".encode("ascii")
    out += payload
    return bytes(out)


def _read_decimal(blob: bytes, idx: int, what: str) -> tuple[int, int]:
    """Parse ASCII digits up to a newline; return (value, idx after newline)."""
    start = idx
    while idx < len(blob) and 0x30 <= blob[idx] <= 0x39:
        idx += 1
    if idx == start:
        raise CorruptStream(f"text artifact: expected decimal {what} at offset {start}")
    if idx >= len(blob) or blob[idx] != 0x0A:
        raise CorruptStream(f"text artifact: {what} not newline-terminated (offset {idx})")
    return int(blob[start:idx]), idx + 1


def unpack_container_text(blob: bytes) -> Artifact:
    idx = 0
    num_syms, idx = _read_decimal(blob, idx, "symbol count")
    if num_syms == 0 or num_syms > 256:
        raise CorruptStream(f"text artifact: symbol count out of range (1..256): {num_syms}")

    pairs: list[tuple[int, int]] = []
    for i in range(num_syms):
        if idx + 2 > len(blob):
            raise CorruptStream(f"text artifact: truncated at frequency entry {i}")
        sym = blob[idx]
        if blob[idx + 1] != 0x20:
            raise CorruptStream(f"text artifact: missing separator after symbol (entry {i})")
        f, idx = _read_decimal(blob, idx + 2, f"frequency of entry {i}")
        pairs.append((sym, f))

    lastbits, idx = _read_decimal(blob, idx, "last-byte bit count")
    if lastbits > 8:
        raise CorruptStream(f"text artifact: last-byte bit count out of range (0..8): {lastbits}")

    try:
        freq = FrequencyTable.from_pairs(pairs)
    except ValueError as e:
        raise CorruptStream(f"text artifact: {e}") from e

    return Artifact(
        format=FORMAT_TEXT,
        layer="sentinel",
        freq=freq,
        lastbits=lastbits,
        payload=blob[idx:],
    )
