from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from huffkit.core.freq import FrequencyTable
from huffkit.errors import EmptyInputError

log = logging.getLogger(__name__)


# -------------------
# Strutture di base Huffman
# -------------------
@dataclass(frozen=True)
class Leaf:
    symbol: int  # 0-255
    freq: int


@dataclass(frozen=True)
class Internal:
    freq: int
    left: "Node"
    right: "Node"


Node = Union[Leaf, Internal]


@dataclass(frozen=True)
class HuffmanTree:
    root: Node

    def leaves(self) -> Iterator[tuple[Leaf, int]]:
        """Yield (leaf, depth) pairs, left to right."""
        stack: list[tuple[Node, int]] = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            if isinstance(node, Leaf):
                yield node, depth
            else:
                stack.append((node.right, depth + 1))
                stack.append((node.left, depth + 1))

    def depth(self) -> int:
        return max(d for _, d in self.leaves())


def build_tree(freq: FrequencyTable) -> HuffmanTree:
    """Greedy Huffman merge over the nonzero entries of ``freq``.

    Heap key is (freq, seq): leaves get seq in ascending symbol order, every
    merged node takes the next seq. Among equal frequencies the node inserted
    first pops first; the first popped node becomes the left child.
    """
    heap: list[tuple[int, int, Node]] = []
    counter = itertools.count()

    for sym, f in freq.items():
        heapq.heappush(heap, (f, next(counter), Leaf(symbol=sym, freq=f)))

    if not heap:
        raise EmptyInputError("frequency table has no nonzero entries")

    # Caso speciale: un solo simbolo => la foglia è la radice
    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = Internal(freq=f1 + f2, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    root = heap[0][2]
    log.debug("huffman tree: %d symbols, total freq %d", freq.distinct, root.freq)
    return HuffmanTree(root=root)
