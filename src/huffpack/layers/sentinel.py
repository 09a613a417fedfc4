from __future__ import annotations

import sys
from dataclasses import dataclass

from huffpack.errors import SentinelCollision

SPACE = 0x20
SENTINEL = ord("_")

ON_COLLISION_REJECT = "reject"
ON_COLLISION_ALLOW = "allow"


@dataclass(frozen=True)
class LayerSentinel:
    """
    Layer sentinel: lo spazio viaggia come '_'.

    The text artifact never persists a literal space, so every space is
    counted, coded and stored as the sentinel and restored on decode.
    A literal '_' in the input would come back as a space:
      - on_collision="reject" refuses such input (SentinelCollision)
      - on_collision="allow" keeps the old lossy behaviour and warns
    """

    id: str = "sentinel"
    on_collision: str = ON_COLLISION_REJECT

    def __post_init__(self) -> None:
        if self.on_collision not in (ON_COLLISION_REJECT, ON_COLLISION_ALLOW):
            raise ValueError(f"on_collision must be reject|allow, got {self.on_collision!r}")

    def encode(self, data: bytes) -> bytes:
        hits = data.count(SENTINEL)
        if hits:
            if self.on_collision == ON_COLLISION_REJECT:
                raise SentinelCollision(
                    f"input contains {hits} literal '_' byte(s); they would decode as spaces "
                    "(use the binary format with the bytes layer, or allow the collision)"
                )
            print(
                f"[huffpack] warning: {hits} literal '_' byte(s) will decode as spaces",
                file=sys.stderr,
            )
        return data.replace(bytes([SPACE]), bytes([SENTINEL]))

    def decode(self, symbols: bytes) -> bytes:
        return symbols.replace(bytes([SENTINEL]), bytes([SPACE]))
