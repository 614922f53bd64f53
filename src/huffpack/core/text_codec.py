from __future__ import annotations

from collections.abc import Iterable
from typing import Dict, List, Tuple

from huffpack.core.tree import Internal, Leaf, TreeNode
from huffpack.errors import MalformedMessageError, UnmappedSymbolError

CodeTable = Dict[str, Tuple[int, ...]]


def build_code_table(tree: TreeNode) -> CodeTable:
    codes: CodeTable = {}

    def dfs(node: TreeNode, path: List[int]) -> None:
        # Foglia
        if isinstance(node, Leaf):
            codes[node.symbol] = tuple(path)
            return
        path.append(0)
        dfs(node.zero, path)
        path[-1] = 1
        dfs(node.one, path)
        path.pop()

    dfs(tree, [])
    return codes


def encode(tree: TreeNode, text: str) -> List[int]:
    """text -> bit del messaggio (codici concatenati, nell'ordine del testo)."""
    codes = build_code_table(tree)
    out: List[int] = []
    for pos, ch in enumerate(text):
        code = codes.get(ch)
        if code is None:
            raise UnmappedSymbolError(ch, pos)
        out.extend(code)
    return out


def decode(tree: TreeNode, bits: Iterable[int]) -> str:
    """
    Decodifica camminando l'albero dalla radice: 0 -> zero, 1 -> one.
    Ogni foglia raggiunta emette il suo simbolo e riporta alla radice.
    """
    if isinstance(tree, Leaf):
        raise MalformedMessageError("albero degenere (una sola foglia): nessun cammino decodificabile")

    out: List[str] = []
    node: TreeNode = tree
    consumed = 0

    for bit in bits:
        # node è sempre interno qui: le foglie riportano subito alla radice
        assert isinstance(node, Internal)
        if bit == 0:
            node = node.zero
        elif bit == 1:
            node = node.one
        else:
            raise MalformedMessageError(f"bit non valido in posizione {consumed}: {bit!r}")
        consumed += 1

        if isinstance(node, Leaf):
            out.append(node.symbol)
            node = tree

    if node is not tree:
        raise MalformedMessageError(f"codice troncato alla fine del messaggio ({consumed} bit letti)")

    return "".join(out)
