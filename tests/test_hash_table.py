"""
Unit tests for ChainingHashTable: duplicate rejection, chain order, rehashing.
Run: python tests/test_hash_table.py
"""

import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import pytest

from film_index.hash_table import (
	PRIME_CAPACITIES,
	ChainingHashTable,
	is_prime,
	next_capacity,
	next_prime,
)


def test_add_get_and_duplicate_rejection():
	table = ChainingHashTable(capacity=7)
	assert table.add(1, "one")
	assert table.add(2, "two")
	assert not table.add(1, "uno")  # rejected, not overwritten
	assert table.get(1) == "one"
	assert table.get(3) is None
	assert table.size == 2
	assert 2 in table and 3 not in table


def test_remove_updates_size_and_key_list():
	table = ChainingHashTable(capacity=7)
	for key in (5, 12, 19, 3):  # 5, 12, 19 share bucket 5
		table.add(key, key * 10)
	assert table.remove(12)
	assert not table.remove(12)
	assert table.get(12) is None
	assert table.get(5) == 50 and table.get(19) == 190
	assert table.size == 3
	assert table.keys_as_int().tolist() == [5, 19, 3]


def test_items_follow_bucket_then_chain_order():
	table = ChainingHashTable(capacity=5)
	for key in (1, 6, 11, 0):
		table.add(key, str(key))
	# bucket 0 holds 0; bucket 1 holds 11 -> 6 -> 1 (head-prepend)
	assert [k for k, _ in table.items()] == [0, 11, 6, 1]
	assert list(table) == [0, 11, 6, 1]
	assert table.bucket_head(1).key == 11
	assert table.bucket_head(2) is None


def test_negative_keys_hash_to_valid_buckets():
	table = ChainingHashTable(capacity=3)
	assert table.add(-4, "a")
	assert table.add(-1, "b")
	assert table.get(-4) == "a"
	assert table.get(-1) == "b"


def test_rehash_triggers_past_load_factor():
	table = ChainingHashTable(capacity=5)
	for key in range(7):
		table.add(key, key)
	assert table.capacity == 5  # 7 / 5 = 1.4
	table.add(7, 7)  # 8 / 5 = 1.6
	assert table.capacity == PRIME_CAPACITIES[0]
	assert table.size == 8
	for key in range(8):
		assert table.get(key) == key


def test_remove_and_get_never_rehash():
	table = ChainingHashTable(capacity=5)
	for key in range(7):
		table.add(key, key)
	for key in range(7):
		table.remove(key)
	assert table.capacity == 5
	assert table.size == 0


def test_next_capacity_uses_prime_table():
	assert next_capacity(2153) == 4307
	assert next_capacity(4307) == 8623
	assert next_capacity(2) == 4307
	assert next_capacity(2211329) == 4422677


def test_next_capacity_falls_back_to_prime_search():
	capacity = next_capacity(PRIME_CAPACITIES[-1])
	assert capacity >= PRIME_CAPACITIES[-1] * 2
	assert capacity % 2 == 1
	assert is_prime(capacity)


def test_prime_helpers():
	assert [n for n in range(20) if is_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19]
	assert next_prime(14) == 17
	assert next_prime(17) == 17
	assert next_prime(1) == 2


def test_random_workload_matches_dict():
	rng = random.Random(7)
	keys = rng.sample(range(1_000_000), 5000)
	table = ChainingHashTable()
	expected = {}
	for key in keys:
		assert table.add(key, key + 1)
		expected[key] = key + 1
	removed = keys[::3]
	for key in removed:
		assert table.remove(key)
		del expected[key]

	assert table.capacity > 2153  # rehashed at least once
	assert table.size == len(expected)
	assert set(table) == set(expected)
	assert sorted(table.keys_as_int().tolist()) == sorted(expected)
	for key, value in expected.items():
		assert table.get(key) == value
	pairs = list(table.items())
	assert len(pairs) == len(expected)  # every pair exactly once


def test_invalid_construction():
	with pytest.raises(ValueError):
		ChainingHashTable(capacity=0)
	with pytest.raises(ValueError):
		ChainingHashTable(max_load_factor=0)


def main():
	print("Running ChainingHashTable tests...")
	test_add_get_and_duplicate_rejection()
	test_remove_updates_size_and_key_list()
	test_items_follow_bucket_then_chain_order()
	test_negative_keys_hash_to_valid_buckets()
	test_rehash_triggers_past_load_factor()
	test_remove_and_get_never_rehash()
	test_next_capacity_uses_prime_table()
	test_next_capacity_falls_back_to_prime_search()
	test_prime_helpers()
	test_random_workload_matches_dict()
	test_invalid_construction()
	print("All ChainingHashTable tests passed!")


if __name__ == '__main__':
	main()
