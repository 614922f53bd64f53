from __future__ import annotations

from huffpack.core.codec_base import Codec


class CodecRaw(Codec):
    """
    Codec identity: BODY salvato così com'è.
    """

    codec_id: str = "raw"

    def compress(self, data: bytes) -> bytes:
        return bytes(data)

    def decompress(self, data: bytes, out_size: int | None = None) -> bytes:
        b = bytes(data)
        if out_size is not None and len(b) != int(out_size):
            raise ValueError(f"raw: out_size mismatch: got={len(b)} expected={out_size}")
        return b
