from __future__ import annotations

from dataclasses import dataclass

from huffpack.core.codec_base import Codec

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


@dataclass
class CodecZstd(Codec):
    """
    Post-codec zstd sul BODY del container.

    "tight" prova a minimizzare l'overhead del frame zstd:
      - no content size nel frame
      - no checksum
    """

    level: int = 19
    tight: bool = False

    def __post_init__(self) -> None:
        if not (1 <= int(self.level) <= 22):
            raise ValueError(f"zstd level must be 1..22, got {self.level}")

    @property
    def codec_id(self) -> str:  # type: ignore[override]
        return "zstd_tight" if self.tight else "zstd"

    def _require(self) -> None:
        if zstd is None:
            raise RuntimeError(
                "Modulo 'zstandard' non disponibile. Installa con: python3 -m pip install zstandard"
            )

    def compress(self, data: bytes) -> bytes:
        self._require()

        if self.tight:
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
        else:
            c = zstd.ZstdCompressor(level=int(self.level))

        return c.compress(data)

    def decompress(self, data: bytes, out_size: int | None = None) -> bytes:
        self._require()
        d = zstd.ZstdDecompressor()
        if out_size is None:
            return d.decompress(data)
        return d.decompress(data, max_output_size=int(out_size))
