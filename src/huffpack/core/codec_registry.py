from __future__ import annotations

from huffpack.core.codec_base import Codec
from huffpack.core.codec_raw import CodecRaw
from huffpack.core.codec_zlib import CodecZlib
from huffpack.core.codec_zstd import CodecZstd
from huffpack.errors import UsageError

CODEC_IDS: tuple[str, ...] = ("raw", "zlib", "zstd", "zstd_tight")


def make_codec(codec_id: str, level: int | None = None) -> Codec:
    """codec id (+ livello opzionale) -> istanza Codec."""
    cid = codec_id.strip().lower()
    try:
        if cid == "raw":
            return CodecRaw()
        if cid == "zlib":
            return CodecZlib(level=9 if level is None else int(level))
        if cid in ("zstd", "zstd_tight"):
            return CodecZstd(level=19 if level is None else int(level), tight=(cid == "zstd_tight"))
    except ValueError as e:
        raise UsageError(str(e)) from e
    raise UsageError(f"codec non supportato: {codec_id!r} (validi: {', '.join(CODEC_IDS)})")
