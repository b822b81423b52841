"""Huffman tree construction and code tables."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .types import MAX_CODES_COUNT


@dataclass(eq=False)
class Node:
    """A tree node: a leaf carries a byte value, an inner node has children."""

    freq: int = 0
    value: int | None = None
    left: Node | None = None
    right: Node | None = None

    def is_leaf(self) -> bool:
        return self.value is not None


def count_frequencies(data: bytes) -> list[int]:
    """Return how often each of the 256 byte values occurs in data."""
    frequencies = [0] * MAX_CODES_COUNT
    for value, count in Counter(data).items():
        frequencies[value] = count
    return frequencies


def _insert_by_freq(items: list[Node], node: Node) -> None:
    # Items are kept in descending order of frequency; a new node goes
    # before the first item whose frequency does not exceed its own.
    position = next((i for i, item in enumerate(items) if item.freq <= node.freq), len(items))
    items.insert(position, node)


def build_tree(frequencies: Sequence[int]) -> Node | None:
    """Build the Huffman tree for byte frequencies; None when all are zero."""
    items = [Node(freq=freq, value=value) for value, freq in enumerate(frequencies) if freq]
    if not items:
        return None
    items.sort(key=lambda node: (-node.freq, node.value))
    while len(items) > 1:
        smallest = items.pop()
        second = items.pop()
        _insert_by_freq(items, Node(freq=smallest.freq + second.freq, left=second, right=smallest))
    return items[0]


def _walk(node: Node | None, prefix: str) -> Iterator[tuple[int, str]]:
    if node is None:
        return
    if node.is_leaf():
        yield node.value, prefix
        return
    yield from _walk(node.left, prefix + "0")
    yield from _walk(node.right, prefix + "1")


def code_table(tree: Node | None) -> dict[int, str]:
    """Map each byte value in the tree to its code as a string of '0' and '1'."""
    return dict(_walk(tree, ""))