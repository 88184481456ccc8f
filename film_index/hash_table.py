"""
Separate-chaining hash table.
Maps integer-like keys to values with singly linked collision chains and
rehashes into a prime capacity once the load factor passes a threshold.
"""

import math  # square root bound for trial division
from typing import Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

import numpy as np  # int key arrays

from loguru import logger  # console logger

from .sequence import GrowableSequence  # running key list

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# Precomputed primes, each roughly double the previous one
PRIME_CAPACITIES = (
	4307, 8623, 17257, 34537, 69091, 138193,
	276401, 552811, 1105657, 2211329, 4422677,
)

DEFAULT_CAPACITY = 2153
DEFAULT_MAX_LOAD_FACTOR = 1.5


def is_prime(num: int) -> bool:
	"""Trial division over odd divisors up to sqrt(num)."""
	if num < 2:
		return False
	if num % 2 == 0:
		return num == 2
	for divisor in range(3, math.isqrt(num) + 1, 2):
		if num % divisor == 0:
			return False
	return True


def next_prime(candidate: int) -> int:
	"""Smallest prime >= candidate, scanning odd numbers only."""
	if candidate <= 2:
		return 2
	if candidate % 2 == 0:
		candidate += 1
	while not is_prime(candidate):
		candidate += 2
	return candidate


def next_capacity(capacity: int) -> int:
	"""
	Capacity to rehash into: double the current one, then round up to the
	next entry of PRIME_CAPACITIES, or search for a prime past the table.
	"""
	candidate = capacity * 2
	if candidate > PRIME_CAPACITIES[-1]:
		return next_prime(candidate)
	for prime in PRIME_CAPACITIES:
		if prime >= candidate:
			return prime
	return next_prime(candidate)  # unreachable while the table is ascending


class ChainEntry(Generic[K, V]):
	"""One link of a bucket chain."""

	__slots__ = ["key", "value", "next"]

	def __init__(self, key: K, value: V, next: "Optional[ChainEntry[K, V]]" = None):
		self.key = key
		self.value = value
		self.next = next

	def __repr__(self) -> str:
		return f"ChainEntry(key={self.key!r}, value={self.value!r})"


class ChainingHashTable(Generic[K, V]):
	"""
	Hash table with head-prepend chaining.

	Duplicate keys are rejected rather than overwritten: add() returns False
	and leaves the table untouched. Rehashing only happens inside add().
	"""

	def __init__(self, capacity: int = DEFAULT_CAPACITY, max_load_factor: float = DEFAULT_MAX_LOAD_FACTOR):
		if capacity < 1:
			raise ValueError("Capacity must be at least 1")
		if max_load_factor <= 0:
			raise ValueError("max_load_factor must be positive")
		self._capacity = capacity
		self._max_load_factor = max_load_factor
		self._buckets: List[Optional[ChainEntry[K, V]]] = [None] * capacity
		self._keys: GrowableSequence[K] = GrowableSequence()
		self._size = 0

	@staticmethod
	def _bucket_index(key: K, capacity: int) -> int:
		return abs(hash(key)) % capacity

	def _find_entry(self, key: K) -> Optional[ChainEntry[K, V]]:
		entry = self._buckets[self._bucket_index(key, self._capacity)]
		while entry is not None:
			if entry.key == key:
				return entry
			entry = entry.next
		return None

	def add(self, key: K, value: V) -> bool:
		"""Insert key -> value. Returns False (no mutation) if key is already present."""
		index = self._bucket_index(key, self._capacity)
		entry = self._buckets[index]
		while entry is not None:
			if entry.key == key:
				return False
			entry = entry.next

		self._buckets[index] = ChainEntry(key, value, self._buckets[index])
		self._size += 1
		self._keys.append(key)

		if self.load_factor > self._max_load_factor:
			self._rehash()
		return True

	def remove(self, key: K) -> bool:
		"""Unlink key from its chain. Returns False if key is absent."""
		index = self._bucket_index(key, self._capacity)
		previous: Optional[ChainEntry[K, V]] = None
		entry = self._buckets[index]
		while entry is not None:
			if entry.key == key:
				if previous is None:
					self._buckets[index] = entry.next
				else:
					previous.next = entry.next
				entry.next = None
				self._size -= 1
				self._keys.remove(key)
				return True
			previous = entry
			entry = entry.next
		return False

	def get(self, key: K) -> Optional[V]:
		entry = self._find_entry(key)
		return entry.value if entry is not None else None

	def _rehash(self) -> None:
		new_capacity = next_capacity(self._capacity)
		new_buckets: List[Optional[ChainEntry[K, V]]] = [None] * new_capacity

		for head in self._buckets:
			entry = head
			while entry is not None:
				index = self._bucket_index(entry.key, new_capacity)
				new_buckets[index] = ChainEntry(entry.key, entry.value, new_buckets[index])
				entry = entry.next

		logger.debug(
			f"[HashTable] Rehashed {self._size} entries | capacity {self._capacity} -> {new_capacity}"
		)
		# Swap only once every entry has been re-inserted
		self._capacity = new_capacity
		self._buckets = new_buckets

	def bucket_head(self, index: int) -> Optional[ChainEntry[K, V]]:
		"""Head of the chain at a bucket index (None when the bucket is empty)."""
		return self._buckets[index]

	def items(self) -> Iterator[Tuple[K, V]]:
		"""
		Yield every (key, value) pair exactly once: bucket order, then
		head-to-tail within a chain (most recently inserted first).
		"""
		for head in self._buckets:
			entry = head
			while entry is not None:
				yield entry.key, entry.value
				entry = entry.next

	def values(self) -> Iterator[V]:
		for _, value in self.items():
			yield value

	def keys_as_int(self) -> np.ndarray:
		"""Live keys in insertion order as an int64 array."""
		return self._keys.to_int_array()

	@property
	def size(self) -> int:
		return self._size

	@property
	def capacity(self) -> int:
		return self._capacity

	@property
	def load_factor(self) -> float:
		return self._size / self._capacity

	def __len__(self) -> int:
		return self._size

	def __contains__(self, key: object) -> bool:
		return self._find_entry(key) is not None

	def __iter__(self) -> Iterator[K]:
		for key, _ in self.items():
			yield key

	def __repr__(self) -> str:
		return f"ChainingHashTable(size={self._size}, capacity={self._capacity})"
