from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union


# -------------------
# Nodi dell'albero di codifica
# -------------------
@dataclass(frozen=True)
class Leaf:
    symbol: str


@dataclass(frozen=True)
class Internal:
    zero: "TreeNode"  # bit 0
    one: "TreeNode"   # bit 1


TreeNode = Union[Leaf, Internal]


def iter_leaves(node: TreeNode) -> Iterator[Leaf]:
    """Leaves in pre-order (zero-branch first)."""
    stack: list[TreeNode] = [node]
    while stack:
        cur = stack.pop()
        if isinstance(cur, Leaf):
            yield cur
        else:
            stack.append(cur.one)
            stack.append(cur.zero)


def leaf_count(node: TreeNode) -> int:
    return sum(1 for _ in iter_leaves(node))


def tree_depth(node: TreeNode) -> int:
    """Longest root-to-leaf path, in edges."""
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(node.zero), tree_depth(node.one))
