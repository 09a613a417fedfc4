"""
huffpack: Huffman su byte, un file alla volta.

compress:   input file -> frequency table + code table -> artifact (text | binary)
decompress: artifact -> tree rebuilt from the persisted frequencies -> text
"""

from __future__ import annotations

from pathlib import Path

from huffpack.core.codec_huffman import HuffmanEncoded
from huffpack.engine.container import Engine
from huffpack.errors import InputNotFound, OutputNotWritable
from huffpack.options_spec import CompressOptions


def compress_bytes(data: bytes, options: CompressOptions | None = None) -> tuple[bytes, HuffmanEncoded]:
    opts = options or CompressOptions()
    return Engine().encode(
        data, fmt=opts.format, layer_id=opts.layer, on_collision=opts.on_collision
    )


def decompress_bytes(blob: bytes) -> bytes:
    return Engine().decode(blob)


def read_input(path: str | Path) -> bytes:
    p = Path(path)
    try:
        return p.read_bytes()
    except FileNotFoundError as e:
        raise InputNotFound(f"input not found: {p}") from e
    except OSError as e:
        # directory, permissions, path through a regular file, ELOOP, ENAMETOOLONG
        raise InputNotFound(f"input not readable: {p} ({e.strerror})") from e


def write_output(path: str | Path, blob: bytes) -> None:
    p = Path(path)
    try:
        p.write_bytes(blob)
    except OSError as e:
        raise OutputNotWritable(f"cannot write output: {p} ({e.strerror})") from e


def compress_file(
    input_path: str | Path,
    output_path: str | Path,
    options: CompressOptions | None = None,
) -> HuffmanEncoded:
    data = read_input(input_path)
    blob, enc = compress_bytes(data, options)
    write_output(output_path, blob)
    return enc


def decompress_file(input_path: str | Path, output_path: str | Path) -> None:
    blob = read_input(input_path)
    write_output(output_path, decompress_bytes(blob))


def print_stats(original_path: str | Path, compressed_path: str | Path, enc: HuffmanEncoded) -> None:
    original_path = Path(original_path)
    compressed_path = Path(compressed_path)

    size_orig = original_path.stat().st_size
    size_comp = compressed_path.stat().st_size

    print("=== huffpack stats ===")
    print(f"Original       : {original_path} ({size_orig} bytes)")
    print(f"Compressed     : {compressed_path} ({size_comp} bytes)")
    print(f"Symbols        : {len(enc.freq)} distinct, {enc.freq.total} total")
    print(f"Payload        : {enc.bit_length} bits + {enc.padding} padding")

    ratio = size_comp / size_orig
    bps = enc.bit_length / enc.freq.total

    print(f"Ratio          : {ratio:.3f} (1.0 = no compression)")
    print(f"Bits/symbol    : {bps:.3f} (8.0 = uncompressed, header excluded)")
    print("======================")
