from __future__ import annotations

import pytest

from huffkit.core.codec_bits import EncodedPayload, decode, encode
from huffkit.core.codes import CodeTable, assign_codes
from huffkit.core.freq import count_frequencies
from huffkit.core.tree import build_tree
from huffkit.errors import InvalidCodeError, UnknownSymbolError

# Golden vector: b"abracadabra" with its own code table
#   a=0 c=100 d=101 b=110 r=111
#   0 110 111 0 100 0 101 0 110 111 0  -> 23 bits, MSB-first, zero padded
ABRA_BITS = "01101110100010101101110"
ABRA_HEX = "6e8adc"


def _codes(data: bytes) -> CodeTable:
    return assign_codes(build_tree(count_frequencies(data)))


def test_encode_golden_abracadabra() -> None:
    p = encode(b"abracadabra", _codes(b"abracadabra"))
    assert p.bitstream.hex() == ABRA_HEX
    assert p.nbits == 23
    assert p.n == 11
    assert p.lastbits == 7
    assert p.bits() == ABRA_BITS


def test_decode_golden_abracadabra() -> None:
    codes = _codes(b"abracadabra")
    p = EncodedPayload(bitstream=bytes.fromhex(ABRA_HEX), nbits=23, n=11)
    assert decode(p, codes) == b"abracadabra"


def test_single_symbol_roundtrip() -> None:
    codes = _codes(b"aaaa")
    p = encode(b"aaaa", codes)
    assert p.bits() == "0000"
    assert p.bitstream == b"\x00"
    assert decode(p, codes) == b"aaaa"


def test_full_bytes_lastbits_8() -> None:
    codes = CodeTable({0: "0", 1: "1"})
    p = encode(bytes([1, 0, 1, 0, 1, 0, 1, 0]), codes)
    assert p.bitstream == b"\xaa"
    assert p.lastbits == 8


def test_empty_data() -> None:
    p = encode(b"", CodeTable({97: "0"}))
    assert p == EncodedPayload(bitstream=b"", nbits=0, n=0)
    assert p.lastbits == 0
    assert decode(p, CodeTable({97: "0"})) == b""


def test_unknown_symbol() -> None:
    codes = _codes(b"a")
    with pytest.raises(UnknownSymbolError) as ei:
        encode(b"ab", codes)
    assert ei.value.symbol == ord("b")
    assert ei.value.position == 1


def test_from_bits_roundtrip_without_count() -> None:
    codes = _codes(b"abracadabra")
    p = EncodedPayload.from_bits(ABRA_BITS)
    assert p.n is None
    assert p.bitstream.hex() == ABRA_HEX
    assert decode(p, codes) == b"abracadabra"


def test_from_bits_rejects_non_binary() -> None:
    with pytest.raises(InvalidCodeError):
        EncodedPayload.from_bits("0102")


def test_decode_bits_matching_no_code() -> None:
    codes = CodeTable({97: "0", 98: "10"})
    with pytest.raises(InvalidCodeError, match="no code matches"):
        decode(EncodedPayload.from_bits("011"), codes)


def test_decode_stream_ends_inside_code() -> None:
    codes = _codes(b"abracadabra")
    with pytest.raises(InvalidCodeError, match="inside a code"):
        decode(EncodedPayload.from_bits("01"), codes)


def test_decode_symbol_count_mismatch() -> None:
    codes = _codes(b"abracadabra")
    p = EncodedPayload(bitstream=bytes.fromhex(ABRA_HEX), nbits=23, n=12)
    with pytest.raises(InvalidCodeError, match="expected 12 symbols"):
        decode(p, codes)


def test_decode_trailing_bits() -> None:
    codes = _codes(b"abracadabra")
    p = EncodedPayload(bitstream=bytes.fromhex(ABRA_HEX), nbits=23, n=10)
    with pytest.raises(InvalidCodeError, match="trailing bits"):
        decode(p, codes)


def test_decode_inconsistent_nbits() -> None:
    with pytest.raises(InvalidCodeError, match="inconsistent"):
        decode(EncodedPayload(bitstream=b"\x00", nbits=9, n=1), CodeTable({97: "0"}))


def test_decode_with_mismatched_table() -> None:
    p = encode(b"abracadabra", _codes(b"abracadabra"))
    with pytest.raises(InvalidCodeError):
        decode(p, CodeTable({ord("x"): "0", ord("y"): "10"}))


def test_decode_rejects_non_prefix_free_table() -> None:
    with pytest.raises(InvalidCodeError, match="prefix-free"):
        decode(EncodedPayload.from_bits("0"), CodeTable({97: "0", 98: "01"}))


def test_unknown_out_of_range_symbol() -> None:
    with pytest.raises(UnknownSymbolError) as ei:
        encode([-1], CodeTable({97: "0"}))
    assert ei.value.symbol == -1
    assert ei.value.position == 0


def test_decode_rejects_extra_whole_bytes() -> None:
    p = EncodedPayload(bitstream=b"\x00\xff\xff", nbits=1, n=1)
    with pytest.raises(InvalidCodeError, match="inconsistent"):
        decode(p, CodeTable({97: "0"}))


def test_decode_rejects_shared_codes() -> None:
    with pytest.raises(InvalidCodeError, match="prefix-free"):
        decode(EncodedPayload.from_bits("0"), {97: "0", 98: "0"})
