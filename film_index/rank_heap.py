"""
Bounded rank heap.
A fixed-capacity binary min-heap of (rank key, id) pairs. Used as a streaming
top-K selector over large scans, and as a plain heap-sort when its capacity
equals the number of elements.
"""

from dataclasses import dataclass  # ordered record for heap slots
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np  # id arrays


@dataclass(frozen=True, order=True)
class RankPair:
	"""
	A heap slot. Pairs order by key first and id second, so equal keys
	resolve deterministically by ascending id.
	"""
	key: Any  # comparable rank metric (count, average, billing order, ...)
	id: int  # entity id or original array position


class RankHeap:
	"""
	Min-heap over a fixed array. ``last_index`` is the index of the last
	populated slot (-1 when empty); the heap never grows past its capacity.
	"""

	def __init__(self, capacity: int):
		if capacity < 0:
			raise ValueError("Capacity must be non-negative")
		self._slots: List[Optional[RankPair]] = [None] * capacity
		self._last_index = -1

	@property
	def capacity(self) -> int:
		return len(self._slots)

	def __len__(self) -> int:
		return self._last_index + 1

	def is_full(self) -> bool:
		return self._last_index == len(self._slots) - 1

	def is_empty(self) -> bool:
		return self._last_index == -1

	def peek(self) -> Optional[RankPair]:
		if self.is_empty():
			return None
		return self._slots[0]

	def add(self, pair: RankPair) -> bool:
		"""Insert pair and sift it up. Returns False when the heap is full."""
		if self.is_full():
			return False
		self._last_index += 1
		self._slots[self._last_index] = pair
		self._sift_up(self._last_index)
		return True

	def pop_root(self) -> Optional[RankPair]:
		"""Remove and return the minimum pair, or None if empty."""
		if self.is_empty():
			return None
		root = self._slots[0]
		self._slots[0] = self._slots[self._last_index]
		self._slots[self._last_index] = None
		self._last_index -= 1
		self._sift_down(0)
		return root

	def _sift_up(self, index: int) -> None:
		slots = self._slots
		while index > 0:
			parent = (index - 1) // 2
			if not slots[index] < slots[parent]:
				break
			slots[index], slots[parent] = slots[parent], slots[index]
			index = parent

	def _sift_down(self, index: int) -> None:
		slots = self._slots
		last = self._last_index
		while True:
			left = 2 * index + 1
			right = left + 1
			if left > last:
				break
			# Left child wins ties against the right
			if right > last or not slots[right] < slots[left]:
				child = left
			else:
				child = right
			if slots[index] < slots[child]:
				break
			slots[index], slots[child] = slots[child], slots[index]
			index = child

	def sorted_descending_ids(self) -> np.ndarray:
		"""Drain the heap into an id array, largest key first."""
		out = np.empty(len(self), dtype=np.int64)
		for i in range(len(out) - 1, -1, -1):
			out[i] = self.pop_root().id
		return out

	def sorted_ascending_ids(self) -> np.ndarray:
		"""Drain the heap into an id array, smallest key first."""
		out = np.empty(len(self), dtype=np.int64)
		for i in range(len(out)):
			out[i] = self.pop_root().id
		return out


def offer(heap: RankHeap, pair: RankPair) -> bool:
	"""
	One step of the top-K streaming protocol. Fills the heap first, then
	replaces the root only when pair is strictly greater than it.
	Returns True if pair was kept.
	"""
	if not heap.is_full():
		return heap.add(pair)
	root = heap.peek()
	if root is not None and pair > root:
		heap.pop_root()
		return heap.add(pair)
	return False


def select_top_k(pairs: Iterable[RankPair], k: int) -> np.ndarray:
	"""Ids of the k largest pairs in descending order."""
	if k <= 0:
		return np.empty(0, dtype=np.int64)
	heap = RankHeap(k)
	for pair in pairs:
		offer(heap, pair)
	return heap.sorted_descending_ids()


def heap_sort_positions(keys: Sequence[Any]) -> np.ndarray:
	"""
	Positions of keys in ascending key order. Equal keys keep their original
	relative order, since the position doubles as the pair id.
	"""
	heap = RankHeap(len(keys))
	for position, key in enumerate(keys):
		heap.add(RankPair(key, position))
	return heap.sorted_ascending_ids()
