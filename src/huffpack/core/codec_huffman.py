from __future__ import annotations

from dataclasses import dataclass

from huffpack.core.bitpack import decode_bitstream, meaningful_bits, pack_bits, padding_for
from huffpack.core.codes import CodeTable, build_code_table, weighted_length
from huffpack.core.freq_table import FrequencyTable
from huffpack.core.huffman_tree import HuffmanNode, build_huffman_tree
from huffpack.errors import CorruptStream, EmptyInput


@dataclass(frozen=True)
class HuffmanEncoded:
    freq: FrequencyTable
    codes: CodeTable
    lastbits: int
    payload: bytes

    @property
    def bit_length(self) -> int:
        return weighted_length(self.freq, self.codes)

    @property
    def padding(self) -> int:
        return padding_for(self.bit_length)


def huffman_encode(symbols: bytes) -> HuffmanEncoded:
    """
    Core: symbols -> (freq, codes, lastbits, payload)
    """
    if not symbols:
        raise EmptyInput("empty input: nothing to build a Huffman tree from")
    freq = FrequencyTable.from_symbols(symbols)
    root = build_huffman_tree(freq)
    codes = build_code_table(root)
    payload, lastbits = pack_bits(symbols, codes)
    return HuffmanEncoded(freq=freq, codes=codes, lastbits=lastbits, payload=payload)


def _check_framing(freq: FrequencyTable, codes: CodeTable, payload: bytes, lastbits: int) -> None:
    have = meaningful_bits(payload, lastbits)
    want = weighted_length(freq, codes)
    if have != want:
        raise CorruptStream(
            f"payload holds {have} meaningful bits, frequency table needs {want} "
            f"({len(payload)} bytes, lastbits={lastbits})"
        )
    if payload and lastbits not in (0, 8):
        pad_mask = (1 << (8 - lastbits)) - 1
        if payload[-1] & pad_mask:
            raise CorruptStream("non-zero padding bits in the final byte")


def huffman_decode(
    freq: FrequencyTable, lastbits: int, payload: bytes, root: HuffmanNode | None = None
) -> bytes:
    """
    Core: (freq, lastbits, payload) -> symbols

    The tree is rebuilt from ``freq`` with the same algorithm used by
    :func:`huffman_encode`.
    """
    if root is None:
        root = build_huffman_tree(freq)
    codes = build_code_table(root)
    _check_framing(freq, codes, payload, lastbits)
    return decode_bitstream(root, payload, lastbits, n_symbols=freq.total)


class CodecHuffman:
    def encode(self, symbols: bytes) -> HuffmanEncoded:
        return huffman_encode(symbols)

    def decode(self, freq: FrequencyTable, lastbits: int, payload: bytes) -> bytes:
        return huffman_decode(freq, lastbits, payload)
