from __future__ import annotations

from collections.abc import Iterable
from typing import List


def pack_bits(bits: Iterable[int]) -> bytes:
    """
    bit -> bytes, MSB-first. L'ultimo byte è completato con zeri.
    Il numero di bit va salvato a parte.
    """
    out_bytes = bytearray()
    current_byte = 0
    bit_count = 0

    for bit in bits:
        if bit not in (0, 1):
            raise ValueError(f"bit non valido: {bit!r}")
        current_byte = (current_byte << 1) | bit
        bit_count += 1
        if bit_count == 8:
            out_bytes.append(current_byte)
            current_byte = 0
            bit_count = 0

    if bit_count > 0:
        current_byte <<= (8 - bit_count)
        out_bytes.append(current_byte)

    return bytes(out_bytes)


def packed_len(nbits: int) -> int:
    return (nbits + 7) // 8


def unpack_bits(data: bytes, nbits: int) -> List[int]:
    """Inverse of pack_bits. Raises ValueError on size mismatch or non-zero padding."""
    if len(data) != packed_len(nbits):
        raise ValueError(f"attesi {packed_len(nbits)} byte per {nbits} bit, trovati {len(data)}")

    bits: List[int] = []
    for byte in data:
        for bit_index in range(8):
            bits.append((byte >> (7 - bit_index)) & 1)

    if any(bits[nbits:]):
        raise ValueError("padding dell'ultimo byte non nullo")
    del bits[nbits:]
    return bits
