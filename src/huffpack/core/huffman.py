from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from huffpack.core.text_codec import decode, encode
from huffpack.core.tree_builder import build
from huffpack.core.tree_codec import flatten, unflatten


@dataclass(frozen=True)
class EncodedPackage:
    """Artefatto compresso completo: albero appiattito + bit del messaggio."""

    shape: Tuple[int, ...]
    leaves: Tuple[str, ...]
    message_bits: Tuple[int, ...]


def compress(text: str) -> EncodedPackage:
    """
    text -> EncodedPackage

    Raises InsufficientAlphabetError if text has fewer than 2 distinct symbols.
    """
    tree = build(text)
    bits = encode(tree, text)
    shape, leaves = flatten(tree)
    return EncodedPackage(shape=tuple(shape), leaves=tuple(leaves), message_bits=tuple(bits))


def decompress(package: EncodedPackage) -> str:
    tree = unflatten(package.shape, package.leaves)
    return decode(tree, package.message_bits)
