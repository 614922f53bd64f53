from __future__ import annotations

import pytest

from huffpack.core.tree import Internal, Leaf


#            *
#          /   \
#         T     *
#              / \
#             *   E
#            / \
#           R   S
def make_reference_tree() -> Internal:
    return Internal(
        zero=Leaf("T"),
        one=Internal(zero=Internal(zero=Leaf("R"), one=Leaf("S")), one=Leaf("E")),
    )


@pytest.fixture
def reference_tree() -> Internal:
    return make_reference_tree()
