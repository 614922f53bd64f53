"""Flattened tree form: pre-order shape bits + leaf symbols.

  shape:  1 = internal node (zero-branch then one-branch follow), 0 = leaf
  leaves: symbols in the order the leaves are visited
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import List, Tuple

from huffpack.core.tree import Internal, Leaf, TreeNode
from huffpack.errors import MalformedTreeDataError


def flatten(tree: TreeNode) -> Tuple[List[int], List[str]]:
    shape: List[int] = []
    leaves: List[str] = []

    def walk(node: TreeNode) -> None:
        if isinstance(node, Leaf):
            shape.append(0)
            leaves.append(node.symbol)
            return
        shape.append(1)
        walk(node.zero)
        walk(node.one)

    walk(tree)
    return shape, leaves


def unflatten(shape: Sequence[int], leaves: Sequence[str]) -> TreeNode:
    """
    Ricostruisce l'albero consumando shape e leaves in parallelo.

    Rifiuta (MalformedTreeDataError): sequenze esaurite prima del tempo,
    elementi avanzati, bit diversi da 0/1, simboli duplicati, alberi con
    una sola foglia.
    """
    bits: Iterator[int] = iter(shape)
    syms: Iterator[str] = iter(leaves)
    seen: set[str] = set()
    # foglie distinte: la profondità non può superare il numero di foglie
    max_depth = len(leaves)

    def take(depth: int) -> TreeNode:
        if depth > max_depth:
            raise MalformedTreeDataError(f"shape troppo profonda per {max_depth} foglie")
        bit = next(bits, None)
        if bit is None:
            raise MalformedTreeDataError("shape esaurita prima di completare l'albero")
        if bit == 0:
            sym = next(syms, None)
            if sym is None:
                raise MalformedTreeDataError("leaves esaurite prima di completare l'albero")
            if sym in seen:
                raise MalformedTreeDataError(f"simbolo duplicato nelle foglie: {sym!r}")
            seen.add(sym)
            return Leaf(sym)
        if bit == 1:
            zero = take(depth + 1)
            one = take(depth + 1)
            return Internal(zero=zero, one=one)
        raise MalformedTreeDataError(f"bit di shape non valido: {bit!r}")

    root = take(0)

    if next(bits, None) is not None:
        raise MalformedTreeDataError("shape contiene bit in eccesso")
    if next(syms, None) is not None:
        raise MalformedTreeDataError("leaves contiene simboli in eccesso")
    if isinstance(root, Leaf):
        raise MalformedTreeDataError("l'albero deve avere almeno 2 foglie")

    return root
