from __future__ import annotations

import zlib

from huffpack.core.codec_base import Codec


class CodecZlib(Codec):
    """zlib/DEFLATE byte codec (no external deps)."""

    codec_id: str = "zlib"

    def __init__(self, level: int = 9):
        if not (0 <= level <= 9):
            raise ValueError(f"zlib level must be 0..9, got {level}")
        self.level = level

    def compress(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data must be bytes")
        return zlib.compress(bytes(data), self.level)

    def decompress(self, data: bytes, out_size: int | None = None) -> bytes:
        # out_size is ignored for zlib
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data must be bytes")
        return zlib.decompress(bytes(data))
