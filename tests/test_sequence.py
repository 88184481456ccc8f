"""
Unit tests for GrowableSequence: growth, shift-remove, and typed materialization.
Run: python tests/test_sequence.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from film_index.models import Person
from film_index.sequence import GrowableSequence, TypeMismatchError


def test_append_doubles_capacity():
	seq = GrowableSequence()
	assert seq.capacity == 2
	for i in range(5):
		seq.append(i)
	assert len(seq) == 5
	assert seq.capacity == 8
	assert list(seq) == [0, 1, 2, 3, 4]


def test_empty_backing_array_grows_by_one():
	seq = GrowableSequence(initial_capacity=0)
	seq.append("a")
	assert seq.capacity == 1
	seq.append("b")
	assert seq.capacity == 2
	assert list(seq) == ["a", "b"]


def test_remove_shifts_left_and_keeps_order():
	seq = GrowableSequence.of(1, 2, 3, 2, 4)
	assert seq.remove(2)
	assert list(seq) == [1, 3, 2, 4]
	assert not seq.remove(99)
	assert list(seq) == [1, 3, 2, 4]
	assert seq[-1] == 4


def test_add_unique_skips_duplicates():
	seq = GrowableSequence()
	assert seq.add_unique(10)
	assert not seq.add_unique(10)
	assert seq.add_unique(20)
	assert list(seq) == [10, 20]
	assert seq.contains(20)
	assert not seq.contains(30)


def test_to_int_array():
	arr = GrowableSequence.of(3, 1, 2).to_int_array()
	assert arr.dtype == np.int64
	assert arr.tolist() == [3, 1, 2]
	assert GrowableSequence().to_int_array().size == 0


def test_to_float_array():
	arr = GrowableSequence.of(4.0, 2.5).to_float_array()
	assert arr.dtype == np.float64
	assert arr.tolist() == [4.0, 2.5]


def test_typed_materialization_rejects_wrong_types():
	with pytest.raises(TypeMismatchError):
		GrowableSequence.of(1, "2").to_int_array()
	with pytest.raises(TypeMismatchError):
		GrowableSequence.of(True).to_int_array()
	with pytest.raises(TypeMismatchError):
		GrowableSequence.of(1.0, 2).to_float_array()
	with pytest.raises(TypeMismatchError):
		GrowableSequence.of(Person(1, "a"), 3).to_list(Person)


def test_to_list_of_people():
	people = GrowableSequence.of(Person(1, "Ann"), Person(2, "Bob")).to_list(Person)
	assert [p.name for p in people] == ["Ann", "Bob"]


def test_index_out_of_range():
	seq = GrowableSequence.of(1)
	with pytest.raises(IndexError):
		seq[1]


def main():
	print("Running GrowableSequence tests...")
	test_append_doubles_capacity()
	test_empty_backing_array_grows_by_one()
	test_remove_shifts_left_and_keeps_order()
	test_add_unique_skips_duplicates()
	test_to_int_array()
	test_to_float_array()
	test_typed_materialization_rejects_wrong_types()
	test_to_list_of_people()
	test_index_out_of_range()
	print("All GrowableSequence tests passed!")


if __name__ == '__main__':
	main()
