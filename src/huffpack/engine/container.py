from __future__ import annotations

from huffpack.core.codec_huffman import CodecHuffman, HuffmanEncoded
from huffpack.engine.artifact import Artifact
from huffpack.engine.container_bin import (
    FORMAT_BINARY,
    MAGIC,
    pack_container_bin,
    unpack_container_bin,
)
from huffpack.engine.container_text import (
    FORMAT_TEXT,
    pack_container_text,
    unpack_container_text,
)
from huffpack.errors import BadMagic, EmptyInput, UsageError
from huffpack.layers.bytes import LayerBytes
from huffpack.layers.sentinel import ON_COLLISION_REJECT, LayerSentinel

FORMATS = (FORMAT_TEXT, FORMAT_BINARY)
LAYERS = ("sentinel", "bytes")


def make_layer(layer_id: str, on_collision: str = ON_COLLISION_REJECT) -> LayerBytes | LayerSentinel:
    if layer_id == "sentinel":
        return LayerSentinel(on_collision=on_collision)
    if layer_id == "bytes":
        return LayerBytes()
    raise UsageError(f"layer non supportato: {layer_id!r} (attesi: {', '.join(LAYERS)})")


class Engine:
    """
    Encode: data -> layer -> Huffman -> container (text | binary)
    Decode: container -> Huffman (tree rebuilt from freq) -> layer -> data
    """

    def __init__(self, codec: CodecHuffman | None = None) -> None:
        self.codec = codec or CodecHuffman()

    def encode(
        self,
        data: bytes,
        *,
        fmt: str = FORMAT_TEXT,
        layer_id: str = "sentinel",
        on_collision: str = ON_COLLISION_REJECT,
    ) -> tuple[bytes, HuffmanEncoded]:
        if fmt not in FORMATS:
            raise UsageError(f"formato non supportato: {fmt!r} (attesi: {', '.join(FORMATS)})")
        if fmt == FORMAT_TEXT and layer_id != "sentinel":
            raise UsageError("the text format stores spaces as '_': it requires the sentinel layer")
        if not data:
            raise EmptyInput("empty input: nothing to compress")

        layer = make_layer(layer_id, on_collision)
        symbols = layer.encode(data)
        enc = self.codec.encode(symbols)

        if fmt == FORMAT_TEXT:
            blob = pack_container_text(enc.freq, enc.lastbits, enc.payload)
        else:
            blob = pack_container_bin(enc.freq, enc.lastbits, enc.payload, layer.id)
        return blob, enc

    def decode(self, blob: bytes) -> bytes:
        art = read_artifact(blob)
        return self.decode_artifact(art)

    def decode_artifact(self, art: Artifact) -> bytes:
        symbols = self.codec.decode(art.freq, art.lastbits, art.payload)
        return make_layer(art.layer).decode(symbols)


def read_artifact(blob: bytes) -> Artifact:
    """Detect the format from the first bytes and parse the header."""
    if blob[:3] == MAGIC:
        return unpack_container_bin(blob)
    if blob[:1].isdigit():
        return unpack_container_text(blob)
    raise BadMagic("not a huffpack artifact (neither binary magic nor text header)")
