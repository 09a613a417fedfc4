from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from huffpack.core.freq_table import FrequencyTable

FormatKind = Literal["text", "binary"]
LayerKind = Literal["sentinel", "bytes"]


@dataclass(frozen=True)
class Artifact:
    """Everything a decoder needs, as read from (or written to) disk."""

    format: FormatKind
    layer: LayerKind
    freq: FrequencyTable
    lastbits: int
    payload: bytes
