from __future__ import annotations

from typing import Optional

from huffpack.core.codes import CodeTable
from huffpack.core.huffman_tree import HuffmanNode
from huffpack.errors import CorruptStream


def padding_for(bit_length: int) -> int:
    """Zero bits needed to reach the next byte boundary (0 when aligned)."""
    return (8 - bit_length % 8) % 8


def pack_bits(symbols: bytes, codes: CodeTable) -> tuple[bytes, int]:
    """
    symbols -> (payload, lastbits)
    lastbits = numero di bit validi nell'ultimo byte (1..8) oppure 0 se symbols vuoto.
    """
    if not symbols:
        return b"", 0

    out_bytes = bytearray()
    current_byte = 0
    bit_count = 0

    for b in symbols:
        try:
            code = codes[b]
        except KeyError:
            raise ValueError(f"symbol {b} has no code in the code table") from None
        for bit in code:
            current_byte = (current_byte << 1) | (bit == "1")
            bit_count += 1
            if bit_count == 8:
                out_bytes.append(current_byte)
                current_byte = 0
                bit_count = 0

    if bit_count > 0:
        current_byte = current_byte << (8 - bit_count)
        out_bytes.append(current_byte)
        lastbits = bit_count
    else:
        lastbits = 8  # tutti i byte pieni

    return bytes(out_bytes), lastbits


def meaningful_bits(payload: bytes, lastbits: int) -> int:
    """Bits carrying data once the final byte's padding is stripped."""
    if not (0 <= lastbits <= 8):
        raise CorruptStream(f"lastbits out of range (0..8): {lastbits}")
    if not payload:
        return 0
    # 0 = artifact written before the aligned case was persisted as 8
    last = lastbits or 8
    return (len(payload) - 1) * 8 + last


def decode_bitstream(
    root: HuffmanNode,
    payload: bytes,
    lastbits: int,
    n_symbols: Optional[int] = None,
) -> bytes:
    """
    Walk the tree bit by bit (MSB-first) over the meaningful bits of
    ``payload``, emitting a symbol each time a leaf is reached.
    """
    out = bytearray()
    node = root
    total_bytes = len(payload)
    depth = 0

    for i, byte in enumerate(payload):
        bits_in_this_byte = 8
        if i == total_bytes - 1 and lastbits != 0:
            bits_in_this_byte = lastbits

        for bit_index in range(bits_in_this_byte):
            bit = (byte >> (7 - bit_index)) & 1
            if root.is_leaf:
                # albero degenere: ogni bit 0 e' un simbolo
                if bit != 0:
                    raise CorruptStream("bit 1 in a single-symbol stream")
                out.append(root.symbol)  # type: ignore[arg-type]
                continue
            nxt = node.left if bit == 0 else node.right
            if nxt is None:
                raise CorruptStream("bit path leaves the Huffman tree")
            node = nxt
            depth += 1
            if node.is_leaf:
                out.append(node.symbol)  # type: ignore[arg-type]
                node = root
                depth = 0

    if depth != 0:
        raise CorruptStream(f"bitstream ends mid-code ({depth} dangling bits)")
    if n_symbols is not None and len(out) != n_symbols:
        raise CorruptStream(f"expected {n_symbols} symbols, decoded {len(out)}")

    return bytes(out)
