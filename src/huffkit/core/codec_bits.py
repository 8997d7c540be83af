from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from huffkit.core.codes import CodeTable, check_code_table
from huffkit.errors import InvalidCodeError, UnknownSymbolError


@dataclass(frozen=True)
class EncodedPayload:
    """MSB-first packed Huffman bits.

    bitstream: packed bytes, last byte zero padded
    nbits:     number of valid bits in bitstream
    n:         number of encoded symbols (None = decode until the bits run out)
    """

    bitstream: bytes
    nbits: int
    n: int | None = None

    @property
    def lastbits(self) -> int:
        """Valid bits in the last byte (1..8), 0 when empty."""
        if self.nbits == 0:
            return 0
        return self.nbits % 8 or 8

    def bits(self) -> str:
        """The valid bits as a '0'/'1' string."""
        s = "".join(format(b, "08b") for b in self.bitstream)
        return s[: self.nbits]

    @classmethod
    def from_bits(cls, bits: str, n: int | None = None) -> "EncodedPayload":
        out = bytearray()
        current_byte = 0
        bit_count = 0
        for i, ch in enumerate(bits):
            if ch not in "01":
                raise InvalidCodeError(f"bit string: invalid character {ch!r} at offset {i}")
            current_byte = (current_byte << 1) | (ch == "1")
            bit_count += 1
            if bit_count == 8:
                out.append(current_byte)
                current_byte = 0
                bit_count = 0
        if bit_count > 0:
            out.append(current_byte << (8 - bit_count))
        return cls(bitstream=bytes(out), nbits=len(bits), n=n)


def encode(data: Iterable[int], codes: Mapping[int, str]) -> EncodedPayload:
    """data -> EncodedPayload; UnknownSymbolError if a symbol has no code."""
    out_bytes = bytearray()
    current_byte = 0
    bit_count = 0
    nbits = 0
    n = 0

    for pos, b in enumerate(data):
        try:
            code = codes[b]
        except KeyError:
            raise UnknownSymbolError(b, position=pos) from None
        for ch in code:
            current_byte = (current_byte << 1) | (ch == "1")
            bit_count += 1
            if bit_count == 8:
                out_bytes.append(current_byte)
                current_byte = 0
                bit_count = 0
        nbits += len(code)
        n += 1

    if bit_count > 0:
        out_bytes.append(current_byte << (8 - bit_count))

    return EncodedPayload(bitstream=bytes(out_bytes), nbits=nbits, n=n)


# Trie di decodifica: nodo = [figlio_0, figlio_1, simbolo]; -1 = assente
# (tabella già validata da check_code_table)
def _build_trie(codes: CodeTable) -> list[list[int]]:
    trie: list[list[int]] = [[-1, -1, -1]]
    for sym, code in codes.items():
        node = 0
        for ch in code:
            bit = 1 if ch == "1" else 0
            if trie[node][bit] < 0:
                trie.append([-1, -1, -1])
                trie[node][bit] = len(trie) - 1
            node = trie[node][bit]
        trie[node][2] = sym
    return trie


def decode(payload: EncodedPayload, codes: Mapping[int, str]) -> bytes:
    """
    Walk the code trie bit by bit, emitting a symbol and restarting from the
    root at every leaf. InvalidCodeError on any bit path that matches no code.
    """
    if payload.nbits < 0 or len(payload.bitstream) != (payload.nbits + 7) // 8:
        raise InvalidCodeError(
            f"payload: nbits={payload.nbits} inconsistent with {len(payload.bitstream)} bytes"
        )
    if payload.n == 0:
        if payload.nbits:
            raise InvalidCodeError("payload: bits present but zero symbols declared")
        return b""
    trie = _build_trie(check_code_table(codes))
    out = bytearray()
    node = 0
    bit_pos = 0

    for byte in payload.bitstream:
        for bit_index in range(8):
            if bit_pos == payload.nbits:
                break
            bit = (byte >> (7 - bit_index)) & 1
            nxt = trie[node][bit]
            if nxt < 0:
                raise InvalidCodeError(f"no code matches the bits ending at offset {bit_pos}")
            bit_pos += 1
            node = nxt
            if trie[node][2] >= 0:
                out.append(trie[node][2])
                node = 0
                if payload.n is not None and len(out) == payload.n:
                    break
        if payload.n is not None and len(out) == payload.n:
            break

    if node != 0:
        raise InvalidCodeError(f"bitstream ends inside a code (offset {bit_pos})")
    if payload.n is not None:
        if len(out) != payload.n:
            raise InvalidCodeError(f"expected {payload.n} symbols, decoded {len(out)}")
        if bit_pos != payload.nbits:
            raise InvalidCodeError(f"{payload.nbits - bit_pos} trailing bits after {payload.n} symbols")
    return bytes(out)
