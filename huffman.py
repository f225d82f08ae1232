from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, Union

from heap import MinHeap

INTERNAL_KEY = "$" # tie-break key of merge nodes, never a leaf symbol of the report alphabet

FrequencyInput = Union[Mapping[Hashable, int], Iterable[Tuple[Hashable, int]]]


class EmptyInputError(ValueError):
    """Raised when a tree is requested for zero leaves."""


@dataclass(frozen=True, eq=False)
class WeightedElement: # Node for Huffman tree
    weight: int
    key: Hashable # symbol for leaves, INTERNAL_KEY (or a caller sentinel) for merge nodes
    left: Optional["WeightedElement"] = None
    right: Optional["WeightedElement"] = None

    def __post_init__(self):
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise ValueError(f"weight must be an int, got {self.weight!r}")
        if self.weight < 0:
            raise ValueError(f"weight must be >= 0, got {self.weight}")
        if (self.left is None) != (self.right is None):
            raise ValueError("internal node needs both children, leaf needs neither")
        if self.left is not None and self.weight != self.left.weight + self.right.weight:
            raise ValueError(
                f"internal weight {self.weight} != {self.left.weight} + {self.right.weight}"
            )

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    def __lt__(self, other: "WeightedElement") -> bool:
        # weight first, key breaks ties so extraction order is deterministic
        if self.weight != other.weight:
            return self.weight < other.weight
        return self.key < other.key

    def __repr__(self) -> str:
        return f"{{{self.weight}:{self.key}}}"


MergeObserver = Callable[[WeightedElement, MinHeap], None]


def leaves_from_frequencies(frequency_table: FrequencyInput) -> List[WeightedElement]:
    """
    Turn (symbol, frequency) pairs, or a symbol -> frequency mapping, into leaf elements.
    Order of the input is preserved; duplicate symbols and negative counts are rejected.
    """
    pairs = frequency_table.items() if isinstance(frequency_table, Mapping) else frequency_table
    leaves: List[WeightedElement] = []
    seen = set()
    for symbol, frequency in pairs:
        if symbol in seen:
            raise ValueError(f"duplicate symbol {symbol!r}")
        seen.add(symbol)
        leaves.append(WeightedElement(frequency, symbol))
    return leaves


def _check_internal_key(heap: MinHeap[WeightedElement], internal_key: Hashable) -> None:
    for element in heap.items():
        if not element.is_leaf:
            continue
        if element.key == internal_key:
            raise ValueError(f"leaf symbol {element.key!r} collides with internal key {internal_key!r}")
        try:
            element.key < internal_key
        except TypeError:
            raise ValueError(
                f"leaf symbol {element.key!r} cannot be ordered against internal key {internal_key!r}"
            ) from None


def build_huffman_tree(
    heap: MinHeap[WeightedElement],
    internal_key: Hashable = INTERNAL_KEY,
    on_merge: Optional[MergeObserver] = None,
) -> WeightedElement:
    """
    Greedy Huffman construction. Drains the heap, two minima at a time, until one
    element is left and returns it. A single-leaf heap returns that leaf unchanged.

    on_merge(merged, heap) is called after each merged node goes back into the heap.
    internal_key must differ from every leaf symbol and be orderable against them,
    e.g. -1 for integer symbols.
    """
    if heap.is_empty():
        raise EmptyInputError("cannot build a Huffman tree from zero leaves")
    _check_internal_key(heap, internal_key)

    while heap.size() > 1:
        left = heap.extract_min()
        right = heap.extract_min()
        merged = WeightedElement(left.weight + right.weight, internal_key, left, right)
        heap.insert(merged)
        if on_merge is not None:
            on_merge(merged, heap)

    return heap.extract_min() # root of the tree


def generate_huffman_codes(root: WeightedElement) -> Dict[Hashable, str]:
    """
    Map each leaf symbol to its root-to-leaf path, left = '0', right = '1'.

    A root that is itself a leaf (one-symbol alphabet) gets '0', since an empty
    codeword could not be decoded. Recursion depth equals the tree height, which
    grows with the number of distinct symbols.
    """
    if root.is_leaf:
        return {root.key: "0"}

    codes: Dict[Hashable, str] = {}

    def generate_codes_helper(node: WeightedElement, current_code: str) -> None:
        if node.is_leaf:
            codes[node.key] = current_code
            return
        generate_codes_helper(node.left, current_code + "0")
        generate_codes_helper(node.right, current_code + "1")

    generate_codes_helper(root, "")
    return codes


def huffman_codebook(
    frequency_table: FrequencyInput,
    internal_key: Hashable = INTERNAL_KEY,
    on_merge: Optional[MergeObserver] = None,
) -> Dict[Hashable, str]:
    # frequencies -> leaves -> heap -> tree -> codebook
    heap = MinHeap(leaves_from_frequencies(frequency_table))
    root = build_huffman_tree(heap, internal_key=internal_key, on_merge=on_merge)
    return generate_huffman_codes(root)


def weighted_code_length(code_map: Mapping[Hashable, str], frequency_table: FrequencyInput) -> int:
    pairs = frequency_table.items() if isinstance(frequency_table, Mapping) else frequency_table
    return sum(frequency * len(code_map[symbol]) for symbol, frequency in pairs)


def running_bit_totals(
    text: Iterable[str], code_map: Mapping[Hashable, str], fixed_width: int = 7
) -> List[Tuple[str, str, int, int]]:
    """
    Walk text and accumulate encoded bits per character.
    Returns (char, code, huffman_total, fixed_total) for every character; a character
    without a codeword raises KeyError.
    """
    rows = []
    huffman_total = 0
    fixed_total = 0
    for ch in text:
        code = code_map[ch]
        huffman_total += len(code)
        fixed_total += fixed_width
        rows.append((ch, code, huffman_total, fixed_total))
    return rows
