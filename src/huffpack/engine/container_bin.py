"""Binary artifact, fixed-width header.

    [ MAGIC(3) | VERSION(1) | LAYER(1) | NUM_SYMS(2)
      | (SYMBOL(1) + FREQ(4)) * NUM_SYMS
      | LASTBITS(1)
      | PAYLOAD_LEN(8)
      | PAYLOAD(...) ]

All integers are big-endian. No field is delimited by a character, so
newline or digit symbols need no special handling.
"""

from __future__ import annotations

from huffpack.core.freq_table import FrequencyTable
from huffpack.engine.artifact import Artifact
from huffpack.errors import BadMagic, CorruptStream, UnsupportedVersion

MAGIC = b"HFP"
VERSION_BIN = 2

FORMAT_BINARY = "binary"

LAYER_TO_CODE = {"bytes": 0, "sentinel": 1}
CODE_TO_LAYER = {v: k for k, v in LAYER_TO_CODE.items()}

_FIXED_HEAD = 3 + 1 + 1 + 2
_FIXED_TAIL = 1 + 8


def pack_container_bin(freq: FrequencyTable, lastbits: int, payload: bytes, layer: str) -> bytes:
    if layer not in LAYER_TO_CODE:
        raise ValueError(f"layer non supportato: {layer}")
    used = list(freq.items())
    if len(used) > 0xFFFF:
        raise ValueError("Troppi simboli distinti per NUM_SYMS (u16)")

    header = bytearray()
    header += MAGIC
    header.append(VERSION_BIN)
    header.append(LAYER_TO_CODE[layer])
    header += len(used).to_bytes(2, "big")

    for sym, f in used:
        if f > 0xFFFFFFFF:
            raise ValueError(f"frequency does not fit FREQ (u32): symbol={sym} freq={f}")
        header.append(sym)                 # SYMBOL (u8)
        header += f.to_bytes(4, "big")     # FREQ (u32)

    header.append(lastbits & 0xFF)
    header += len(payload).to_bytes(8, "big")

    return bytes(header) + payload


def unpack_container_bin(blob: bytes) -> Artifact:
    if len(blob) < 3 or blob[:3] != MAGIC:
        raise BadMagic("binary artifact: bad magic")
    if len(blob) < _FIXED_HEAD:
        raise CorruptStream("binary artifact: truncated header")

    idx = 3
    version = blob[idx]
    idx += 1
    if version != VERSION_BIN:
        raise UnsupportedVersion(f"binary artifact: unsupported version {version}")

    layer_code = blob[idx]
    idx += 1
    layer = CODE_TO_LAYER.get(layer_code)
    if layer is None:
        raise CorruptStream(f"binary artifact: unknown layer code {layer_code}")

    num_syms = int.from_bytes(blob[idx:idx + 2], "big")
    idx += 2
    if num_syms == 0 or num_syms > 256:
        raise CorruptStream(f"binary artifact: symbol count out of range (1..256): {num_syms}")

    if idx + num_syms * 5 + _FIXED_TAIL > len(blob):
        raise CorruptStream("binary artifact: truncated frequency table")

    pairs: list[tuple[int, int]] = []
    for _ in range(num_syms):
        sym = blob[idx]
        f = int.from_bytes(blob[idx + 1:idx + 5], "big")
        idx += 5
        pairs.append((sym, f))

    lastbits = blob[idx]
    idx += 1
    if lastbits > 8:
        raise CorruptStream(f"binary artifact: LASTBITS out of range (0..8): {lastbits}")

    payload_len = int.from_bytes(blob[idx:idx + 8], "big")
    idx += 8
    payload = blob[idx:]
    if len(payload) != payload_len:
        raise CorruptStream(
            f"binary artifact: payload length mismatch (header={payload_len} actual={len(payload)})"
        )

    try:
        freq = FrequencyTable.from_pairs(pairs)
    except ValueError as e:
        raise CorruptStream(f"binary artifact: {e}") from e

    return Artifact(
        format=FORMAT_BINARY,
        layer=layer,  # type: ignore[arg-type]
        freq=freq,
        lastbits=lastbits,
        payload=payload,
    )
