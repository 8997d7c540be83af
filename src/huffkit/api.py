"""Public entrypoints: bytes -> frequencies -> tree -> codes -> payload and back."""

from __future__ import annotations

from huffkit.core.codec_bits import EncodedPayload, decode, encode
from huffkit.core.codec_text import decode_text, encode_text
from huffkit.core.codes import CodeTable, assign_codes, is_prefix_free, weighted_length
from huffkit.core.freq import FrequencyTable, count_frequencies
from huffkit.core.tree import HuffmanTree, build_tree

__all__ = [
    "CodeTable",
    "EncodedPayload",
    "FrequencyTable",
    "HuffmanTree",
    "assign_codes",
    "build_tree",
    "codes_for",
    "compress",
    "count_frequencies",
    "decode",
    "decode_text",
    "decompress",
    "encode",
    "encode_text",
    "is_prefix_free",
    "weighted_length",
]


def codes_for(data: bytes, jobs: int = 1) -> CodeTable:
    """Code table for ``data`` (EmptyInputError on empty input)."""
    return assign_codes(build_tree(count_frequencies(data, jobs=jobs)))


def compress(data: bytes, jobs: int = 1) -> tuple[CodeTable, EncodedPayload]:
    codes = codes_for(data, jobs=jobs)
    return codes, encode(data, codes)


def decompress(payload: EncodedPayload, codes: CodeTable) -> bytes:
    return decode(payload, codes)
