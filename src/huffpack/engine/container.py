from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from huffpack.core.bitpack import pack_bits, packed_len, unpack_bits
from huffpack.core.codec_registry import make_codec
from huffpack.core.huffman import EncodedPackage, compress, decompress
from huffpack.errors import BadMagic, CorruptPayload, HashMismatch, UnsupportedVersion

MAGIC = b"HPK"
VERSION_CONTAINER_V1 = 1
SHA256_LEN = 32


# -------------------
# Varint (LEB128 unsigned)
# -------------------
def _enc_varint(x: int) -> bytes:
    if x < 0:
        raise ValueError("varint negativo non supportato")
    out = bytearray()
    while True:
        b = x & 0x7F
        x >>= 7
        if x:
            out.append(0x80 | b)
        else:
            out.append(b)
            break
    return bytes(out)


def _dec_varint(buf: bytes, idx: int) -> Tuple[int, int]:
    shift = 0
    x = 0
    while True:
        if idx >= len(buf):
            raise CorruptPayload("varint troncato")
        b = buf[idx]
        idx += 1
        x |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            break
        shift += 7
        if shift > 63:
            raise CorruptPayload("varint troppo grande")
    return x, idx


def _take(buf: bytes, idx: int, n: int, what: str) -> Tuple[bytes, int]:
    if idx + n > len(buf):
        raise CorruptPayload(f"container troncato ({what})")
    return buf[idx:idx + n], idx + n


# -------------------
# BODY
# varint(n_shape) | shape packed | varint(n_leaves) | varint(len utf8) | leaves utf8
# | varint(n_msg) | msg packed
# -------------------
def pack_body(package: EncodedPackage) -> bytes:
    leaves_b = "".join(package.leaves).encode("utf-8")

    out = bytearray()
    out += _enc_varint(len(package.shape))
    out += pack_bits(package.shape)
    out += _enc_varint(len(package.leaves))
    out += _enc_varint(len(leaves_b))
    out += leaves_b
    out += _enc_varint(len(package.message_bits))
    out += pack_bits(package.message_bits)
    return bytes(out)


def unpack_body(body: bytes) -> EncodedPackage:
    idx = 0

    n_shape, idx = _dec_varint(body, idx)
    shape_b, idx = _take(body, idx, packed_len(n_shape), "shape")

    n_leaves, idx = _dec_varint(body, idx)
    leaves_len, idx = _dec_varint(body, idx)
    leaves_b, idx = _take(body, idx, leaves_len, "leaves")
    try:
        leaves = tuple(leaves_b.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CorruptPayload(f"leaves non UTF-8: {e}") from e
    if len(leaves) != n_leaves:
        raise CorruptPayload(f"leaves: attese {n_leaves}, trovate {len(leaves)}")

    n_msg, idx = _dec_varint(body, idx)
    msg_b, idx = _take(body, idx, packed_len(n_msg), "message")

    if idx != len(body):
        raise CorruptPayload(f"BODY: {len(body) - idx} byte in eccesso")

    try:
        shape = tuple(unpack_bits(shape_b, n_shape))
        message_bits = tuple(unpack_bits(msg_b, n_msg))
    except ValueError as e:
        raise CorruptPayload(str(e)) from e

    return EncodedPackage(shape=shape, leaves=leaves, message_bits=message_bits)


# -------------------
# Container v1
# [MAGIC(3)|VER(1)|CODECLEN(1)|CODEC|SHA256(32)|ULEN(u32)|CLEN(u32)|COMP]
# -------------------
@dataclass(frozen=True)
class ContainerInfo:
    version: int
    codec_id: str
    text_sha256: bytes
    body_len: int
    comp_len: int


def pack_container(
    package: EncodedPackage, text_sha256: bytes, codec_id: str = "raw", level: int | None = None
) -> bytes:
    if len(text_sha256) != SHA256_LEN:
        raise ValueError("text_sha256 deve essere di 32 byte")
    codec = make_codec(codec_id, level)
    codec_b = codec.codec_id.encode("ascii")

    body = pack_body(package)
    comp = codec.compress(body)
    if len(body) > 0xFFFFFFFF or len(comp) > 0xFFFFFFFF:
        raise ValueError("body troppo grande (u32 overflow)")

    out = bytearray()
    out += MAGIC
    out.append(VERSION_CONTAINER_V1)
    out.append(len(codec_b))
    out += codec_b
    out += text_sha256
    out += len(body).to_bytes(4, "big")
    out += len(comp).to_bytes(4, "big")
    out += comp
    return bytes(out)


def read_container_header(blob: bytes) -> Tuple[ContainerInfo, int]:
    """Parse the header; returns (info, offset of the compressed body)."""
    if len(blob) < 3 or blob[:3] != MAGIC:
        raise BadMagic("Magic number non valido (atteso HPK)")
    idx = 3

    ver_b, idx = _take(blob, idx, 1, "versione")
    ver = ver_b[0]
    if ver != VERSION_CONTAINER_V1:
        raise UnsupportedVersion(f"Versione container non supportata: {ver}")

    codec_len_b, idx = _take(blob, idx, 1, "codec len")
    codec_b, idx = _take(blob, idx, codec_len_b[0], "codec")
    try:
        codec_id = codec_b.decode("ascii")
    except UnicodeDecodeError as e:
        raise CorruptPayload("codec id non ASCII") from e

    sha, idx = _take(blob, idx, SHA256_LEN, "sha256")
    ulen_b, idx = _take(blob, idx, 4, "ulen")
    clen_b, idx = _take(blob, idx, 4, "clen")

    info = ContainerInfo(
        version=ver,
        codec_id=codec_id,
        text_sha256=sha,
        body_len=int.from_bytes(ulen_b, "big"),
        comp_len=int.from_bytes(clen_b, "big"),
    )
    return info, idx


def unpack_container(blob: bytes) -> Tuple[ContainerInfo, EncodedPackage]:
    info, idx = read_container_header(blob)
    comp, idx = _take(blob, idx, info.comp_len, "body")
    if idx != len(blob):
        raise CorruptPayload(f"container: {len(blob) - idx} byte in eccesso")

    try:
        codec = make_codec(info.codec_id)
    except Exception as e:
        raise CorruptPayload(f"codec sconosciuto nel container: {info.codec_id!r}") from e

    try:
        body = codec.decompress(comp, out_size=info.body_len)
    except RuntimeError:
        raise
    except Exception as e:
        raise CorruptPayload(f"{info.codec_id}: decompressione BODY fallita: {e}") from e
    if len(body) != info.body_len:
        raise CorruptPayload(f"BODY: attesi {info.body_len} byte, ottenuti {len(body)}")

    return info, unpack_body(body)


# -------------------
# File API
# -------------------
def text_sha256(text: str) -> bytes:
    return hashlib.sha256(text.encode("utf-8")).digest()


def compress_file(
    input_path: str | Path,
    output_path: str | Path,
    codec_id: str = "raw",
    level: int | None = None,
) -> Tuple[int, int]:
    """UTF-8 text file -> container. Returns (input bytes, output bytes)."""
    raw = Path(input_path).read_bytes()
    text = raw.decode("utf-8")
    package = compress(text)
    blob = pack_container(package, text_sha256(text), codec_id=codec_id, level=level)
    Path(output_path).write_bytes(blob)
    return len(raw), len(blob)


def decompress_file(input_path: str | Path, output_path: str | Path) -> Tuple[int, int]:
    """Container -> UTF-8 text file. Checks the stored sha256."""
    blob = Path(input_path).read_bytes()
    info, package = unpack_container(blob)
    text = decompress(package)
    if text_sha256(text) != info.text_sha256:
        raise HashMismatch("sha256 del testo decodificato non corrisponde")
    out = text.encode("utf-8")
    Path(output_path).write_bytes(out)
    return len(blob), len(out)
