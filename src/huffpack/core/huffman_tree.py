from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import List, Optional

from huffpack.core.freq_table import FrequencyTable
from huffpack.errors import EmptyInput


# -------------------
# Strutture di base Huffman
# -------------------
@dataclass
class HuffmanNode:
    freq: int
    symbol: Optional[int] = None  # 0-255 per foglie, None per interni
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def build_huffman_tree(freq: FrequencyTable) -> HuffmanNode:
    """
    Build the Huffman tree for ``freq``.

    Ties on weight are broken by a sequence number: leaves get 0..k-1 in
    ascending symbol order, merged nodes get the following numbers in merge
    order. The first node popped becomes the left child. Encode and decode
    therefore rebuild the same shape from the same table.
    """
    heap: List[tuple[int, int, HuffmanNode]] = []
    counter = itertools.count()

    for sym, f in freq.items():
        heapq.heappush(heap, (f, next(counter), HuffmanNode(freq=f, symbol=sym)))

    if not heap:
        raise EmptyInput("cannot build a Huffman tree from an empty frequency table")

    # Caso speciale: un solo simbolo => la radice e' la foglia stessa
    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = HuffmanNode(freq=f1 + f2, symbol=None, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]


def symbol_label(sym: int) -> str:
    """Printable label for a byte symbol (control bytes as \\xNN)."""
    ch = chr(sym)
    if 0x21 <= sym <= 0x7E:
        return ch
    if sym == 0x20:
        return "' '"
    return f"\\x{sym:02x}"


def render_tree(root: HuffmanNode, indent: int = 10) -> list[str]:
    """
    Sideways dump of the tree: right subtree above its parent, left subtree
    below, ``indent`` columns per level. Internal nodes show ``*:weight``.
    """
    lines: list[str] = []

    def walk(node: Optional[HuffmanNode], space: int) -> None:
        if node is None:
            return
        space += indent
        walk(node.right, space)
        if node.is_leaf and node.symbol is not None:
            label = f"{symbol_label(node.symbol)}:{node.freq}"
        else:
            label = f"*:{node.freq}"
        lines.append(" " * (space - indent) + label)
        walk(node.left, space)

    walk(root, 0)
    return lines
