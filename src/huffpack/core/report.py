from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List

from huffpack.core.huffman import EncodedPackage
from huffpack.core.text_codec import build_code_table, decode
from huffpack.core.tree import leaf_count, tree_depth
from huffpack.core.tree_codec import unflatten


@dataclass(frozen=True)
class SymbolRow:
    symbol: str
    code: str   # es. "101"
    freq: int


@dataclass(frozen=True)
class PackageReport:
    alphabet_size: int
    tree_depth: int
    shape_bits: int
    message_bits: int
    text_len: int
    rows: List[SymbolRow]

    def weighted_bits(self) -> int:
        return sum(r.freq * len(r.code) for r in self.rows)


def describe_package(package: EncodedPackage) -> PackageReport:
    """
    Riepilogo di un pacchetto: righe (simbolo, codice, frequenza) ordinate per
    lunghezza del codice e poi per codice. Le frequenze si ottengono
    decodificando il messaggio.
    """
    tree = unflatten(package.shape, package.leaves)
    codes = build_code_table(tree)
    text = decode(tree, package.message_bits)
    freq = Counter(text)

    rows = [
        SymbolRow(symbol=sym, code="".join(str(b) for b in code), freq=freq.get(sym, 0))
        for sym, code in codes.items()
    ]
    rows.sort(key=lambda r: (len(r.code), r.code))

    return PackageReport(
        alphabet_size=leaf_count(tree),
        tree_depth=tree_depth(tree),
        shape_bits=len(package.shape),
        message_bits=len(package.message_bits),
        text_len=len(text),
        rows=rows,
    )


def render_report(report: PackageReport) -> str:
    lines: List[str] = []
    lines.append(f"alphabet_size: {report.alphabet_size}")
    lines.append(f"tree_depth:    {report.tree_depth}")
    lines.append(f"shape_bits:    {report.shape_bits}")
    lines.append(f"message_bits:  {report.message_bits}")
    lines.append(f"text_len:      {report.text_len}")
    lines.append("")
    lines.append(f"{'symbol':>8}  {'freq':>8}  code")
    for r in report.rows:
        lines.append(f"{r.symbol!r:>8}  {r.freq:>8}  {r.code}")
    return "\n".join(lines) + "\n"
