"""Verification helpers.

We implement:
  - verify_artifact_file: parse the header and fully decode the payload
    (framing, bit count, leaf boundary, symbol count)
  - optional comparison against the original input

A clean return means the artifact decodes; any problem raises a typed
error from huffpack.errors.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from huffpack.compressor import read_input
from huffpack.engine.container import Engine, read_artifact
from huffpack.errors import CorruptStream


@dataclass(frozen=True)
class VerifyReport:
    format: str
    layer: str
    symbols: int
    total: int
    lastbits: int
    payload_bytes: int
    decoded_sha256: str


def verify_artifact_bytes(blob: bytes, original: bytes | None = None) -> VerifyReport:
    art = read_artifact(blob)
    decoded = Engine().decode_artifact(art)
    if original is not None and decoded != original:
        raise CorruptStream(
            f"decoded output differs from original ({len(decoded)} vs {len(original)} bytes)"
        )
    return VerifyReport(
        format=art.format,
        layer=art.layer,
        symbols=len(art.freq),
        total=art.freq.total,
        lastbits=art.lastbits,
        payload_bytes=len(art.payload),
        decoded_sha256=hashlib.sha256(decoded).hexdigest(),
    )


def verify_artifact_file(input_path: Path, original_path: Path | None = None) -> VerifyReport:
    blob = read_input(input_path)
    original = read_input(original_path) if original_path is not None else None
    return verify_artifact_bytes(blob, original)
