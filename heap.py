"""
MinHeap

Array-backed binary min-heap used as the priority queue for Huffman tree
construction. Works for any element type that defines `<` as a total order.

Children of index i live at 2i+1 and 2i+2, the parent at (i-1)//2.
"""

from __future__ import annotations

from typing import Generic, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


class EmptyContainerError(IndexError):
    """Raised when peeking or extracting from an empty heap."""


class MinHeap(Generic[T]):
    def __init__(self, initial: Iterable[T] = ()):
        self._items: List[T] = list(initial) # copy, caller keeps its sequence
        if self._items:
            self._build_heap()

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MinHeap({self._items!r})"

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> Tuple[T, ...]:
        # storage order, read-only snapshot
        return tuple(self._items)

    def insert(self, value: T) -> None:
        self._items.append(value)
        self._sift_up(len(self._items) - 1)

    def peek_min(self) -> T:
        if not self._items:
            raise EmptyContainerError("heap is empty")
        return self._items[0]

    def extract_min(self) -> T:
        if not self._items:
            raise EmptyContainerError("heap is empty")

        smallest = self._items[0]
        last = self._items.pop()
        if self._items: # last element was not the root itself
            self._items[0] = last
            self._sift_down(0)
        return smallest

    # Internal restructuring

    def _build_heap(self) -> None:
        # Bottom-up heapify, linear time
        for i in range(len(self._items) // 2 - 1, -1, -1):
            self._sift_down(i)

    def _sift_up(self, i: int) -> None:
        items = self._items
        assert 0 <= i < len(items), f"sift_up index {i} out of range"
        while i > 0:
            parent = (i - 1) // 2
            if not items[i] < items[parent]:
                break
            items[i], items[parent] = items[parent], items[i]
            i = parent

    def _sift_down(self, i: int) -> None:
        items = self._items
        n = len(items)
        assert 0 <= i < n, f"sift_down index {i} out of range"
        while True:
            left = 2 * i + 1
            right = left + 1
            smallest = i

            # strict bounds: a child index equal to n is past the end
            if left < n and items[left] < items[smallest]:
                smallest = left
            if right < n and items[right] < items[smallest]:
                smallest = right

            if smallest == i:
                return
            items[i], items[smallest] = items[smallest], items[i]
            i = smallest
