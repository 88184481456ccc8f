"""
Growable sequence container.
An array-backed list with amortized O(1) append and O(n) remove-by-value,
used to accumulate query results and to track live hash table keys.
"""

from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

import numpy as np  # typed output arrays

T = TypeVar("T")


class TypeMismatchError(TypeError):
	"""An element's type disagrees with the requested output type."""


class GrowableSequence(Generic[T]):
	"""
	Dynamic array with explicit capacity doubling.

	Insertion order is preserved by append and by remove, which shifts the
	tail left over the removed slot.
	"""

	__slots__ = ["_items", "_size"]

	def __init__(self, initial_capacity: int = 2):
		if initial_capacity < 0:
			raise ValueError("initial_capacity must be non-negative")
		self._items: List[Optional[T]] = [None] * initial_capacity
		self._size = 0

	@classmethod
	def of(cls, *items: T) -> "GrowableSequence[T]":
		seq = cls(initial_capacity=max(len(items), 1))
		for item in items:
			seq.append(item)
		return seq

	def append(self, item: T) -> None:
		if self._size == len(self._items):
			self._grow()
		self._items[self._size] = item
		self._size += 1

	def _grow(self) -> None:
		# Double, but an empty backing array has to grow by at least one slot
		new_capacity = max(len(self._items) * 2, 1)
		resized: List[Optional[T]] = [None] * new_capacity
		resized[: self._size] = self._items[: self._size]
		self._items = resized

	def remove(self, item: T) -> bool:
		"""Remove the first element equal to item. Returns False if none matched."""
		for i in range(self._size):
			if self._items[i] == item:
				for j in range(i + 1, self._size):
					self._items[j - 1] = self._items[j]
				self._size -= 1
				self._items[self._size] = None
				return True
		return False

	def contains(self, item: T) -> bool:
		for i in range(self._size):
			if self._items[i] == item:
				return True
		return False

	def add_unique(self, item: T) -> bool:
		"""
		Append item unless an equal element is already stored.
		Linear scan, so only meant for short per-entity membership lists.
		"""
		if self.contains(item):
			return False
		self.append(item)
		return True

	def to_int_array(self) -> np.ndarray:
		"""Materialize as an int64 array. Raises TypeMismatchError on non-int elements."""
		out = np.empty(self._size, dtype=np.int64)
		for i in range(self._size):
			item = self._items[i]
			if isinstance(item, bool) or not isinstance(item, (int, np.integer)):
				raise TypeMismatchError(
					f"Element {i} is {type(item).__name__}, not int"
				)
			out[i] = item
		return out

	def to_float_array(self) -> np.ndarray:
		"""Materialize as a float64 array. Raises TypeMismatchError on non-float elements."""
		out = np.empty(self._size, dtype=np.float64)
		for i in range(self._size):
			item = self._items[i]
			if not isinstance(item, (float, np.floating)):
				raise TypeMismatchError(
					f"Element {i} is {type(item).__name__}, not float"
				)
			out[i] = item
		return out

	def to_list(self, of_type: Type[Any]) -> List[Any]:
		"""Materialize as a plain list, checking every element is an instance of of_type."""
		out = []
		for i in range(self._size):
			item = self._items[i]
			if not isinstance(item, of_type):
				raise TypeMismatchError(
					f"Element {i} is {type(item).__name__}, not {of_type.__name__}"
				)
			out.append(item)
		return out

	@property
	def capacity(self) -> int:
		return len(self._items)

	def __len__(self) -> int:
		return self._size

	def __iter__(self) -> Iterator[T]:
		for i in range(self._size):
			yield self._items[i]

	def __getitem__(self, index: int) -> T:
		if index < 0:
			index += self._size
		if not 0 <= index < self._size:
			raise IndexError("sequence index out of range")
		return self._items[index]

	def __repr__(self) -> str:
		return f"GrowableSequence({list(self)!r})"
