"""Delimited text rendition of a Huffman encoding: one code per symbol, joined by a separator."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from huffkit.core.codes import check_code_table
from huffkit.errors import InvalidCodeError, UnknownSymbolError

DEFAULT_SEP = " "


def encode_text(data: Iterable[int], codes: Mapping[int, str], sep: str = DEFAULT_SEP) -> str:
    if not sep or any(c in "01" for c in sep):
        raise ValueError(f"separator must be non-empty and not contain 0/1: {sep!r}")
    parts: list[str] = []
    for pos, b in enumerate(data):
        try:
            parts.append(codes[b])
        except KeyError:
            raise UnknownSymbolError(b, position=pos) from None
    return sep.join(parts)


def decode_text(text: str, codes: Mapping[int, str], sep: str = DEFAULT_SEP) -> bytes:
    """Split on ``sep`` and reverse-look-up every token.

    An unknown or empty token is an error, never a silent empty match; so is
    a table with shared, empty or non-binary codes.
    """
    if not sep or any(c in "01" for c in sep):
        raise ValueError(f"separator must be non-empty and not contain 0/1: {sep!r}")
    if not text:
        return b""

    inverse = check_code_table(codes).inverse()
    out = bytearray()
    for i, tok in enumerate(text.split(sep)):
        sym = inverse.get(tok)
        if sym is None:
            raise InvalidCodeError(f"token #{i} {tok!r} matches no code")
        out.append(sym)
    return bytes(out)
