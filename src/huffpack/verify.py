"""Verification helpers.

file verify: validate a single container file.

Policy: light by default (header + body + tree), --full also decodes the
message and recomputes the text sha256.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from huffpack.core.text_codec import decode
from huffpack.core.tree_codec import unflatten
from huffpack.engine.container import unpack_container
from huffpack.errors import CorruptPayload, HashMismatch


def verify_container_file(path: str | Path, *, full: bool = False) -> None:
    p = Path(path)
    if not p.is_file():
        raise CorruptPayload(f"file non trovato: {p}")

    info, package = unpack_container(p.read_bytes())
    tree = unflatten(package.shape, package.leaves)

    if not full:
        return

    text = decode(tree, package.message_bits)
    got = hashlib.sha256(text.encode("utf-8")).digest()
    if got != info.text_sha256:
        raise HashMismatch(
            f"sha256 mismatch: stored={info.text_sha256.hex()} got={got.hex()}"
        )
