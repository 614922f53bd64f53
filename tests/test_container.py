from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from huffpack.core.bitpack import pack_bits, unpack_bits
from huffpack.core.huffman import compress
from huffpack.engine.container import (
    MAGIC,
    compress_file,
    decompress_file,
    pack_body,
    pack_container,
    read_container_header,
    text_sha256,
    unpack_body,
    unpack_container,
)
from huffpack.errors import BadMagic, CorruptPayload, HashMismatch, UnsupportedVersion

pytestmark = pytest.mark.p1

# Golden vectors (byte-level) for compress("ab"):
#   tree: zero='b', one='a' -> shape 1,0,0 leaves "ba", message "ab" -> 1,0
#
# BODY:
#   varint(3) 0x80 | varint(2) varint(2) "ba" | varint(2) 0x80
AB_BODY_HEX = "0380020262610280"


def test_pack_bits_msb_first() -> None:
    assert pack_bits([]) == b""
    assert pack_bits([1, 0, 1]) == b"\xa0"
    assert pack_bits([1, 1, 1, 1, 0, 0, 0, 0, 1]) == b"\xf0\x80"
    assert unpack_bits(b"\xf0\x80", 9) == [1, 1, 1, 1, 0, 0, 0, 0, 1]


def test_unpack_bits_rejects_bad_sizes_and_padding() -> None:
    with pytest.raises(ValueError):
        unpack_bits(b"\x00\x00", 3)
    with pytest.raises(ValueError, match="padding"):
        unpack_bits(b"\xa1", 3)
    with pytest.raises(ValueError):
        pack_bits([0, 2])


def test_body_golden_ab() -> None:
    pkg = compress("ab")
    body = pack_body(pkg)
    assert body.hex() == AB_BODY_HEX
    assert unpack_body(body) == pkg


def test_container_golden_header_raw() -> None:
    pkg = compress("ab")
    blob = pack_container(pkg, text_sha256("ab"), codec_id="raw")
    assert blob[:8].hex() == MAGIC.hex() + "01" + "03" + b"raw".hex()
    assert blob[8:40] == hashlib.sha256(b"ab").digest()
    assert blob[40:48].hex() == "0000000800000008"
    assert blob[48:].hex() == AB_BODY_HEX


@pytest.mark.parametrize("codec_id", ["raw", "zlib", "zstd", "zstd_tight"])
def test_container_roundtrip_codecs(codec_id: str) -> None:
    text = "Nana Nana Nana Nana Nana Nana Nana Nana Batman\n" * 20
    pkg = compress(text)
    blob = pack_container(pkg, text_sha256(text), codec_id=codec_id)
    info, back = unpack_container(blob)
    assert info.codec_id == codec_id
    assert info.text_sha256 == text_sha256(text)
    assert back == pkg


def test_container_bad_magic() -> None:
    with pytest.raises(BadMagic):
        read_container_header(b"XYZ\x01")


def test_container_unsupported_version() -> None:
    blob = bytearray(pack_container(compress("ab"), text_sha256("ab")))
    blob[3] = 9
    with pytest.raises(UnsupportedVersion):
        unpack_container(bytes(blob))


def test_container_truncated() -> None:
    blob = pack_container(compress("abc"), text_sha256("abc"))
    with pytest.raises(CorruptPayload, match="troncato"):
        unpack_container(blob[:-1])
    with pytest.raises(CorruptPayload):
        unpack_container(blob[:20])


def test_container_trailing_bytes() -> None:
    blob = pack_container(compress("abc"), text_sha256("abc"))
    with pytest.raises(CorruptPayload, match="eccesso"):
        unpack_container(blob + b"\x00")


def test_container_unknown_codec() -> None:
    blob = bytearray(pack_container(compress("ab"), text_sha256("ab")))
    blob[5:8] = b"xyz"
    with pytest.raises(CorruptPayload, match="codec sconosciuto"):
        unpack_container(bytes(blob))


def test_body_leaf_count_mismatch() -> None:
    body = bytearray.fromhex(AB_BODY_HEX)
    body[2] = 3  # n_leaves
    with pytest.raises(CorruptPayload, match="leaves"):
        unpack_body(bytes(body))


def test_file_roundtrip(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.hpk"
    back = tmp_path / "back.txt"

    data = "FATTURA 1001\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\r\nTOTALE 12.00 €\n"
    inp.write_bytes(data.encode("utf-8"))

    n_in, n_out = compress_file(inp, out, codec_id="zlib")
    assert n_in == len(data.encode("utf-8"))
    assert n_out == out.stat().st_size

    decompress_file(out, back)
    assert back.read_bytes() == inp.read_bytes()


def test_decompress_file_detects_hash_mismatch(tmp_path: Path) -> None:
    out = tmp_path / "out.hpk"
    # sha256 volutamente sbagliato
    out.write_bytes(pack_container(compress("abba"), text_sha256("abab")))
    with pytest.raises(HashMismatch):
        decompress_file(out, tmp_path / "back.txt")
