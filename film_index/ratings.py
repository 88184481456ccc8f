"""
Ratings store.
Indexes user ratings by user and by film, keeps running per-user and
per-film statistics, and answers average and "most rated" queries.
"""

from datetime import datetime  # rating timestamps
from typing import Iterator, Optional

import numpy as np  # id and value arrays

from loguru import logger  # console logger

from .config import IndexSettings  # shared tunables
from .hash_table import ChainingHashTable  # id-keyed tables
from .movies import FilmCatalog  # film-existence collaborator
from .rank_heap import RankPair, select_top_k  # ranking helpers
from .sequence import GrowableSequence  # result accumulation


class RatingRecord:
	"""
	One user's rating of one film. The same object is referenced from the
	user index and the film index, so it must only be changed through Ratings.
	"""

	__slots__ = ["user_id", "film_id", "value", "timestamp"]

	def __init__(self, user_id: int, film_id: int, value: float, timestamp: Optional[datetime]):
		self.user_id = user_id
		self.film_id = film_id
		self.value = value
		self.timestamp = timestamp

	def __repr__(self) -> str:
		return f"RatingRecord(user_id={self.user_id}, film_id={self.film_id}, value={self.value})"


class RunningStats:
	"""Count and sum of a set of ratings, updated incrementally."""

	__slots__ = ["count", "total"]

	def __init__(self):
		self.count = 0
		self.total = 0.0

	def add(self, value: float) -> None:
		self.count += 1
		self.total += value

	def discard(self, value: float) -> None:
		self.count -= 1
		self.total -= value

	def replace(self, old_value: float, new_value: float) -> None:
		self.total += new_value - old_value

	@property
	def average(self) -> float:
		return self.total / self.count if self.count else 0.0


class Ratings:
	"""
	Ratings mirrored in two nested tables, user -> (film -> record) and
	film -> (user -> record), with one RunningStats per user and per film.

	Every change goes through _link, _unlink or _rewrite so that both
	references to a record and both statistics stay in step.
	"""

	def __init__(self, catalog: Optional[FilmCatalog] = None, settings: Optional[IndexSettings] = None):
		self.settings = settings or IndexSettings()
		self.catalog = catalog  # consulted for films that have no ratings
		capacity = self.settings.initial_capacity
		load = self.settings.max_load_factor
		self._by_user: ChainingHashTable[int, ChainingHashTable[int, RatingRecord]] = ChainingHashTable(capacity, load)
		self._by_film: ChainingHashTable[int, ChainingHashTable[int, RatingRecord]] = ChainingHashTable(capacity, load)
		self._user_stats: ChainingHashTable[int, RunningStats] = ChainingHashTable(capacity, load)
		self._film_stats: ChainingHashTable[int, RunningStats] = ChainingHashTable(capacity, load)
		self._size = 0

	def _valid_value(self, value: float) -> bool:
		# NaN fails both comparisons
		return self.settings.min_rating <= value <= self.settings.max_rating

	def _new_nested_table(self) -> ChainingHashTable[int, RatingRecord]:
		return ChainingHashTable(self.settings.nested_capacity, self.settings.max_load_factor)

	def _find(self, user_id: int, film_id: int) -> Optional[RatingRecord]:
		films = self._by_user.get(user_id)
		return films.get(film_id) if films is not None else None

	def _link(self, record: RatingRecord) -> None:
		films = self._by_user.get(record.user_id)
		if films is None:
			films = self._new_nested_table()
			self._by_user.add(record.user_id, films)
			self._user_stats.add(record.user_id, RunningStats())
		users = self._by_film.get(record.film_id)
		if users is None:
			users = self._new_nested_table()
			self._by_film.add(record.film_id, users)
			self._film_stats.add(record.film_id, RunningStats())

		films.add(record.film_id, record)
		users.add(record.user_id, record)
		self._user_stats.get(record.user_id).add(record.value)
		self._film_stats.get(record.film_id).add(record.value)
		self._size += 1

	def _unlink(self, record: RatingRecord) -> None:
		films = self._by_user.get(record.user_id)
		users = self._by_film.get(record.film_id)
		films.remove(record.film_id)
		users.remove(record.user_id)

		user_stats = self._user_stats.get(record.user_id)
		user_stats.discard(record.value)
		if user_stats.count == 0:
			self._user_stats.remove(record.user_id)
			self._by_user.remove(record.user_id)

		film_stats = self._film_stats.get(record.film_id)
		film_stats.discard(record.value)
		if film_stats.count == 0:
			self._film_stats.remove(record.film_id)
			self._by_film.remove(record.film_id)
		self._size -= 1

	def _rewrite(self, record: RatingRecord, value: float, timestamp: Optional[datetime]) -> None:
		self._user_stats.get(record.user_id).replace(record.value, value)
		self._film_stats.get(record.film_id).replace(record.value, value)
		record.value = value
		record.timestamp = timestamp

	def add(self, user_id: int, film_id: int, rating: float, timestamp: Optional[datetime] = None) -> bool:
		"""
		Add a rating. Returns False (nothing changes) if the user already
		rated the film or the value is out of range.
		"""
		value = float(rating)
		if not self._valid_value(value):
			logger.warning(f"[Ratings] Rejected out-of-range rating {rating} (user={user_id}, film={film_id})")
			return False
		if self._find(user_id, film_id) is not None:
			logger.debug(f"[Ratings] Rejected duplicate rating (user={user_id}, film={film_id})")
			return False
		self._link(RatingRecord(user_id, film_id, value, timestamp))
		return True

	def set(self, user_id: int, film_id: int, rating: float, timestamp: Optional[datetime] = None) -> bool:
		"""Add a rating, or overwrite the value and timestamp of an existing one."""
		value = float(rating)
		if not self._valid_value(value):
			logger.warning(f"[Ratings] Rejected out-of-range rating {rating} (user={user_id}, film={film_id})")
			return False
		record = self._find(user_id, film_id)
		if record is None:
			self._link(RatingRecord(user_id, film_id, value, timestamp))
		else:
			self._rewrite(record, value, timestamp)
		return True

	def remove(self, user_id: int, film_id: int) -> bool:
		record = self._find(user_id, film_id)
		if record is None:
			return False
		self._unlink(record)
		return True

	def get_rating(self, user_id: int, film_id: int) -> Optional[RatingRecord]:
		return self._find(user_id, film_id)

	@staticmethod
	def _values_of(records: Iterator[RatingRecord]) -> np.ndarray:
		values: GrowableSequence[float] = GrowableSequence()
		for record in records:
			values.append(record.value)
		return values.to_float_array()

	def get_movie_ratings(self, film_id: int) -> np.ndarray:
		users = self._by_film.get(film_id)
		if users is None:
			return np.empty(0, dtype=np.float64)
		return self._values_of(users.values())

	def get_user_ratings(self, user_id: int) -> np.ndarray:
		films = self._by_user.get(user_id)
		if films is None:
			return np.empty(0, dtype=np.float64)
		return self._values_of(films.values())

	def _film_known(self, film_id: int) -> bool:
		return self.catalog is not None and self.catalog.get_title(film_id) is not None

	def get_movie_average_rating(self, film_id: int) -> float:
		"""
		Mean rating of a film. 0.0 if the catalog knows the film but nobody
		rated it, -1.0 if the film is unknown everywhere.
		"""
		stats = self._film_stats.get(film_id)
		if stats is None:
			return 0.0 if self._film_known(film_id) else -1.0
		return stats.average

	def get_user_average_rating(self, user_id: int) -> float:
		stats = self._user_stats.get(user_id)
		return stats.average if stats is not None else -1.0

	def get_num_ratings(self, film_id: int) -> int:
		"""
		Number of ratings of a film. 0 if the catalog knows the film but
		nobody rated it, -1 if the film is unknown everywhere.
		"""
		stats = self._film_stats.get(film_id)
		if stats is None:
			return 0 if self._film_known(film_id) else -1
		return stats.count

	def get_most_rated_movies(self, num: int) -> np.ndarray:
		return select_top_k(
			(RankPair(stats.count, film_id) for film_id, stats in self._film_stats.items()), num
		)

	def get_most_rated_users(self, num: int) -> np.ndarray:
		return select_top_k(
			(RankPair(stats.count, user_id) for user_id, stats in self._user_stats.items()), num
		)

	def get_top_average_rated_movies(self, num: int) -> np.ndarray:
		return select_top_k(
			(RankPair(stats.average, film_id) for film_id, stats in self._film_stats.items()), num
		)

	def size(self) -> int:
		"""Number of stored ratings."""
		return self._size
