from __future__ import annotations

import pytest

from huffpack.core.huffman import EncodedPackage, compress, decompress
from huffpack.errors import InsufficientAlphabetError, MalformedMessageError, MalformedTreeDataError


def test_decompress_reference_package() -> None:
    pkg = EncodedPackage(
        shape=(1, 0, 1, 1, 0, 0, 0),
        leaves=("T", "R", "S", "E"),
        message_bits=(0, 1, 0, 0, 1, 1, 1, 0, 1, 1, 0, 1),
    )
    assert decompress(pkg) == "TRESS"


def test_decompress_raffle() -> None:
    pkg = EncodedPackage(
        shape=(1, 1, 0, 1, 0, 0, 1, 0, 0),
        leaves=tuple("FLERA"),
        message_bits=(1, 0, 1, 1, 0, 0, 0, 0, 0, 1, 0, 0, 1, 1),
    )
    assert decompress(pkg) == "RAFFLE"


def test_compress_reference() -> None:
    pkg = compress("STREETTEST")
    assert pkg.shape == (1, 0, 1, 1, 0, 0, 0)
    assert pkg.leaves == ("T", "R", "S", "E")
    assert pkg.message_bits == (1, 0, 1, 0, 1, 0, 0, 1, 1, 1, 1, 0, 0, 1, 1, 1, 0, 1, 0)


@pytest.mark.parametrize(
    "text",
    [
        "ab",
        "HAPPY HIP HOP",
        "Nana Nana Nana Nana Nana Nana Nana Nana Batman",
        "Research is formalized curiosity. It is poking and prying with a purpose. – Zora Neale Hurston",
        "riga 1\nriga 2\r\n\ttab\x00nul",
        "ΩλΩλΩ 漢字漢字 🙂🙂",
    ],
)
def test_roundtrip(text: str) -> None:
    assert decompress(compress(text)) == text


@pytest.mark.parametrize("text", ["", "aaaa"])
def test_compress_insufficient_alphabet(text: str) -> None:
    with pytest.raises(InsufficientAlphabetError):
        compress(text)


def test_compress_is_deterministic() -> None:
    text = "FATTURA 1001\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\n"
    assert compress(text) == compress(text)


def test_decompress_malformed_tree() -> None:
    pkg = EncodedPackage(shape=(1, 0), leaves=("a",), message_bits=(0,))
    with pytest.raises(MalformedTreeDataError):
        decompress(pkg)


def test_decompress_malformed_message() -> None:
    pkg = compress("STREETTEST")
    bad = EncodedPackage(shape=pkg.shape, leaves=pkg.leaves, message_bits=pkg.message_bits + (1,))
    with pytest.raises(MalformedMessageError):
        decompress(bad)


def test_compressed_bits_shorter_than_fixed_width() -> None:
    text = "Nana Nana Nana Nana Nana Nana Nana Nana Batman"
    pkg = compress(text)
    assert len(pkg.message_bits) < 8 * len(text)
