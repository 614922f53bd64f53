from __future__ import annotations

from abc import ABC, abstractmethod


class Codec(ABC):
    """
    Interfaccia minima per i post-codec del container.

    Lavorano sul BODY già serializzato (bytes), non sui simboli Huffman.
    """

    codec_id: str

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decompress(self, data: bytes, out_size: int | None = None) -> bytes:
        raise NotImplementedError
