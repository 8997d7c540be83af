"""Human-readable report of a Huffman run (classic textbook presentation).

Sections:
  - input as binary (one 8-bit group per byte)
  - frequencies, most to least frequent
  - code per symbol
  - delimited encoded text
  - bit counts and compression percentage
  - decoded text (proves the round-trip)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from huffkit.core.codec_bits import decode, encode
from huffkit.core.codec_text import encode_text
from huffkit.core.codes import CodeTable, assign_codes
from huffkit.core.freq import FrequencyTable, count_frequencies
from huffkit.core.tree import build_tree


def sym_label(sym: int) -> str:
    ch = chr(sym)
    if ch.isprintable() and sym < 0x7F:
        return ch
    return f"0x{sym:02x}"


def format_binary(data: bytes) -> str:
    return " ".join(format(b, "08b") for b in data)


def format_frequencies(freq: FrequencyTable) -> str:
    rows = sorted(freq.items(), key=lambda kv: (-kv[1], kv[0]))
    lines = [f"'{sym_label(s)}' appeared {f} {'time' if f == 1 else 'times'}" for s, f in rows]
    return "\n".join(lines)


def format_codes(codes: Mapping[int, str]) -> str:
    return "\n".join(f"{sym_label(s)} : {codes[s]}" for s in sorted(codes))


def compression_ratio(original_bits: int, new_bits: int) -> float:
    """new size as a percentage of the original size."""
    if original_bits <= 0:
        raise ValueError("compression_ratio: original_bits must be > 0")
    return new_bits * 100.0 / original_bits


@dataclass(frozen=True)
class Report:
    data: bytes
    freq: FrequencyTable
    codes: CodeTable
    encoded_text: str
    original_bits: int
    new_bits: int
    decoded: bytes

    @property
    def ratio(self) -> float:
        return compression_ratio(self.original_bits, self.new_bits)


def build_report(data: bytes, bits_per_symbol: int = 8, jobs: int = 1) -> Report:
    if bits_per_symbol <= 0:
        raise ValueError("bits_per_symbol must be > 0")
    freq = count_frequencies(data, jobs=jobs)
    codes = assign_codes(build_tree(freq))
    payload = encode(data, codes)
    return Report(
        data=bytes(data),
        freq=freq,
        codes=codes,
        encoded_text=encode_text(data, codes),
        original_bits=len(data) * bits_per_symbol,
        new_bits=payload.nbits,
        decoded=decode(payload, codes),
    )


def render_report(r: Report) -> str:
    out = [
        format_binary(r.data),
        "",
        format_frequencies(r.freq),
        "",
        format_codes(r.codes),
        "",
        r.encoded_text,
        "",
        f"Original number of bits: {r.original_bits}",
        f"New number of bits: {r.new_bits}",
        "",
        f"The text has been compressed to {r.ratio:.2f} percent of its original size.",
        "Decompressed string(original text) : " + r.decoded.decode("utf-8", errors="replace"),
    ]
    return "\n".join(out) + "\n"
