from __future__ import annotations

import heapq
import itertools
from collections import Counter
from typing import Dict, List, Tuple

from huffpack.core.tree import Internal, Leaf, TreeNode
from huffpack.errors import InsufficientAlphabetError


def build_freq_table(text: str) -> Dict[str, int]:
    return dict(Counter(text))


def build_tree_from_freq(freq: Dict[str, int]) -> TreeNode:
    """
    Costruzione Huffman classica su una tabella di frequenze.

    Tie-break deterministico: le foglie entrano nell'heap in ordine di simbolo,
    e a parità di frequenza esce prima l'ultima voce inserita (chiave -seq).
    Il primo estratto diventa il ramo zero, il secondo il ramo one.
    """
    if len(freq) < 2:
        raise InsufficientAlphabetError(len(freq))

    heap: List[Tuple[int, int, TreeNode]] = []
    counter = itertools.count()

    for sym in sorted(freq):
        f = freq[sym]
        if f <= 0:
            raise ValueError(f"frequenza non positiva per {sym!r}: {f}")
        heapq.heappush(heap, (f, -next(counter), Leaf(sym)))

    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        heapq.heappush(heap, (f1 + f2, -next(counter), Internal(zero=n1, one=n2)))

    return heap[0][2]


def build(text: str) -> TreeNode:
    """Build the optimal encoding tree for ``text`` (needs >= 2 distinct symbols)."""
    return build_tree_from_freq(build_freq_table(text))
