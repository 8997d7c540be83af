"""Size comparison of the Huffman payload against general-purpose byte codecs."""

from __future__ import annotations

import zlib
from dataclasses import dataclass

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None

from huffkit.core.codec_bits import encode
from huffkit.core.codes import assign_codes
from huffkit.core.freq import count_frequencies
from huffkit.core.tree import build_tree


class CodecZlib:
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


@dataclass
class CodecZstd:
    """
    zstd byte codec.

    "tight" drops the optional frame fields (content size, checksum) so the
    size is closer to the raw entropy-coded body.
    """

    level: int = 19
    codec_id: str = "zstd"
    tight: bool = False

    def _require(self) -> None:
        if zstd is None:
            raise RuntimeError(
                "Module 'zstandard' not available. Install with: python3 -m pip install zstandard"
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


def have_zstd() -> bool:
    return zstd is not None


@dataclass(frozen=True)
class SizeRow:
    name: str
    size: int  # bytes


def compare_sizes(data: bytes, jobs: int = 1) -> list[SizeRow]:
    """raw / huffman / zlib / zstd sizes for ``data``.

    The huffman row counts only the packed bitstream (the code table is
    stored out of band). The zstd row is omitted when zstandard is missing.
    """
    codes = assign_codes(build_tree(count_frequencies(data, jobs=jobs)))
    rows = [
        SizeRow("raw", len(data)),
        SizeRow("huffman", len(encode(data, codes).bitstream)),
        SizeRow("zlib", len(CodecZlib().compress(data))),
    ]
    if have_zstd():
        rows.append(SizeRow("zstd", len(CodecZstd(tight=True).compress(data))))
    return rows
