from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from huffkit.core.freq import FrequencyTable
from huffkit.core.tree import HuffmanTree, Internal, Leaf, Node
from huffkit.errors import InvalidCodeError


class CodeTable(Mapping[int, str]):
    """Immutable symbol -> code mapping ('0'/'1' strings), ascending symbol order."""

    __slots__ = ("_codes",)

    def __init__(self, codes: Mapping[int, str]):
        self._codes = MappingProxyType({int(s): str(codes[s]) for s in sorted(codes)})

    def __getitem__(self, sym: int) -> str:
        return self._codes[sym]

    def __iter__(self) -> Iterator[int]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._codes) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._codes.items()))

    def __repr__(self) -> str:
        return f"CodeTable({dict(self._codes)!r})"

    def inverse(self) -> dict[str, int]:
        return {c: s for s, c in self._codes.items()}


def assign_codes(tree: HuffmanTree) -> CodeTable:
    """Derive one code per leaf: '0' for a left edge, '1' for a right edge.

    A tree made of a single leaf gets the code "0" (an empty code could not be
    told apart in a stream).
    """
    if isinstance(tree.root, Leaf):
        return CodeTable({tree.root.symbol: "0"})

    codes: dict[int, str] = {}
    stack: list[tuple[Node, str]] = [(tree.root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Internal):
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
        else:
            codes[node.symbol] = path
    return CodeTable(codes)


def weighted_length(freq: FrequencyTable, codes: Mapping[int, str]) -> int:
    """Total encoded size in bits: sum of count * len(code)."""
    return sum(f * len(codes[sym]) for sym, f in freq.items())


def is_prefix_free(codes: Mapping[int, str]) -> bool:
    # ordinati, un prefisso precede sempre immediatamente un suo esteso
    ordered = sorted(codes.values())
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))


def check_code_table(codes: Mapping[int, str]) -> CodeTable:
    """Validate a table that did not necessarily come from assign_codes.

    Symbols must be 0..255, codes non-empty 0/1 strings, no code shared or
    prefix of another. InvalidCodeError otherwise.
    """
    if not codes:
        raise InvalidCodeError("code table is empty")
    for sym, code in codes.items():
        if not isinstance(sym, int) or isinstance(sym, bool) or not 0 <= sym <= 255:
            raise InvalidCodeError(f"code table: symbol {sym!r} out of range 0..255")
        if not isinstance(code, str) or not code or set(code) - {"0", "1"}:
            raise InvalidCodeError(f"code table: invalid code {code!r} for symbol {sym}")
    if not is_prefix_free(codes):
        raise InvalidCodeError("code table is not prefix-free")
    return codes if isinstance(codes, CodeTable) else CodeTable(codes)
