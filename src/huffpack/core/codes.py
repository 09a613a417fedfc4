from __future__ import annotations

from typing import Dict

from huffpack.core.freq_table import FrequencyTable
from huffpack.core.huffman_tree import HuffmanNode, symbol_label

CodeTable = Dict[int, str]


def build_code_table(root: HuffmanNode) -> CodeTable:
    """symbol -> root-to-leaf path (left=0, right=1)."""
    codes: CodeTable = {}

    def dfs(node: HuffmanNode, path: str) -> None:
        # Foglia
        if node.is_leaf:
            if node.symbol is None:
                raise ValueError("leaf without symbol in Huffman tree")
            # radice-foglia (un solo simbolo): codice "0", mai vuoto
            codes[node.symbol] = path or "0"
            return
        if node.left is not None:
            dfs(node.left, path + "0")
        if node.right is not None:
            dfs(node.right, path + "1")

    dfs(root, "")
    return codes


def weighted_length(freq: FrequencyTable, codes: CodeTable) -> int:
    """Total encoded bit count: sum of freq * len(code)."""
    return sum(f * len(codes[sym]) for sym, f in freq.items())


def render_code_table(codes: CodeTable) -> list[str]:
    return [f"{symbol_label(sym)} {codes[sym]}" for sym in sorted(codes)]
