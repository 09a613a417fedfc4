from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayerBytes:
    """
    Layer identita'.
    - symbols: bytes (uguale all'input)
    Used by the binary format, which stores raw byte values.
    """

    id: str = "bytes"

    def encode(self, data: bytes) -> bytes:
        return data

    def decode(self, symbols: bytes) -> bytes:
        return symbols
