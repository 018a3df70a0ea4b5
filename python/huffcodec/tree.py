import heapq
from dataclasses import dataclass, field

from huffcodec.abc import CodeTable, FrequencyMap
from huffcodec.errors import StructuralCorruptionError

NIL = -1


@dataclass
class Node:
    weight: int
    symbol: int | None = None  # None for internal nodes
    left: int = NIL
    right: int = NIL

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None


@dataclass
class HuffmanTree:
    """Nodes live in `nodes` and refer to their children by index."""

    nodes: list[Node] = field(default_factory=list)
    root: int = NIL

    def add_leaf(self, symbol: int, weight: int = 0) -> int:
        self.nodes.append(Node(weight, symbol=symbol))
        return len(self.nodes) - 1

    def add_internal(self, weight: int = 0, left: int = NIL, right: int = NIL) -> int:
        self.nodes.append(Node(weight, left=left, right=right))
        return len(self.nodes) - 1

    def child(self, index: int, bit: int) -> int:
        node = self.nodes[index]
        if node.is_leaf:
            raise StructuralCorruptionError(
                f"cannot descend past leaf for symbol {node.symbol}"
            )
        return node.right if bit else node.left

    def shape(self, index: int | None = None) -> tuple | int:
        """Nested tuples of symbols, for comparing trees structurally."""
        if index is None:
            index = self.root
        if index == NIL:
            return ()
        node = self.nodes[index]
        if node.is_leaf:
            assert node.symbol is not None
            return node.symbol
        return (self.shape(node.left), self.shape(node.right))


def build_tree(freqs: FrequencyMap) -> HuffmanTree:
    # Ties on weight are broken by insertion order: leaves first, in
    # ascending symbol order, then merged nodes in creation order.
    if len(freqs) == 0:
        raise ValueError("cannot build a Huffman tree from an empty alphabet")

    tree = HuffmanTree()
    queue: list[tuple[int, int, int]] = []
    seq = 0
    for s in sorted(freqs):
        w = freqs[s]
        assert w > 0, f"non-positive frequency {w} for symbol {s}"
        heapq.heappush(queue, (w, seq, tree.add_leaf(s, w)))
        seq += 1

    while len(queue) > 1:
        w1, _, left = heapq.heappop(queue)
        w2, _, right = heapq.heappop(queue)
        merged = tree.add_internal(w1 + w2, left, right)
        heapq.heappush(queue, (w1 + w2, seq, merged))
        seq += 1

    tree.root = queue[0][2]
    return tree


def generate_codes(tree: HuffmanTree) -> CodeTable:
    codes: CodeTable = {}
    if tree.root == NIL:
        return codes

    root = tree.nodes[tree.root]
    if root.is_leaf:
        # A single symbol still needs one bit per occurrence
        assert root.symbol is not None
        codes[root.symbol] = "0"
        return codes

    def walk(index: int, path: str) -> None:
        node = tree.nodes[index]
        if node.is_leaf:
            assert node.symbol is not None
            codes[node.symbol] = path
            return
        walk(node.left, path + "0")
        walk(node.right, path + "1")

    walk(tree.root, "")
    return codes


def reconstruct_tree(table: CodeTable) -> HuffmanTree:
    """Rebuild a decoding tree from a code table.

    Each code is walked from the root, creating internal nodes for bits
    that have no child yet, and the symbol is hung as a leaf at the end of
    the path. The result has the same prefix structure as the tree the
    table was generated from. Inconsistent codes raise
    StructuralCorruptionError.
    """
    tree = HuffmanTree()
    tree.root = tree.add_internal()

    for symbol in sorted(table):
        code = table[symbol]
        if code == "":
            raise StructuralCorruptionError(f"empty code for symbol {symbol}")

        current = tree.root
        for depth, bit in enumerate(code):
            node = tree.nodes[current]
            if node.is_leaf:
                raise StructuralCorruptionError(
                    f"code {code!r} for symbol {symbol} passes through the leaf "
                    f"for symbol {node.symbol} at depth {depth}"
                )
            last = depth == len(code) - 1
            if bit == "0":
                nxt = node.left
            elif bit == "1":
                nxt = node.right
            else:
                raise StructuralCorruptionError(
                    f"invalid bit {bit!r} in code for symbol {symbol}"
                )

            if nxt == NIL:
                nxt = tree.add_leaf(symbol) if last else tree.add_internal()
                if bit == "0":
                    node.left = nxt
                else:
                    node.right = nxt
            elif last:
                other = tree.nodes[nxt]
                what = f"symbol {other.symbol}" if other.is_leaf else "a longer code"
                raise StructuralCorruptionError(
                    f"code {code!r} for symbol {symbol} collides with {what}"
                )
            current = nxt

    return tree
