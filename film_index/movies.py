"""
Movie store.
Keeps film value records by id and answers the film-existence checks the
ratings store relies on.
"""

from typing import Optional, Protocol  # structural typing for collaborators

import numpy as np  # id arrays

from loguru import logger  # console logger

from .config import IndexSettings  # shared tunables
from .hash_table import ChainingHashTable  # id -> Movie table
from .models import Movie  # film value record


class FilmCatalog(Protocol):
	"""Anything that can tell whether a film id exists."""

	def get_title(self, film_id: int) -> Optional[str]:
		"""Title of the film, or None if the id is unknown."""
		...


class MovieStore:
	"""
	Film records keyed by film id. Duplicate ids are rejected.
	"""

	def __init__(self, settings: Optional[IndexSettings] = None):
		self.settings = settings or IndexSettings()
		self._movies: ChainingHashTable[int, Movie] = ChainingHashTable(
			self.settings.initial_capacity, self.settings.max_load_factor
		)

	def add(self, movie: Movie) -> bool:
		if not self._movies.add(movie.id, movie):
			logger.debug(f"[Movies] Rejected duplicate film id {movie.id}")
			return False
		return True

	def remove(self, film_id: int) -> bool:
		return self._movies.remove(film_id)

	def get(self, film_id: int) -> Optional[Movie]:
		return self._movies.get(film_id)

	def get_title(self, film_id: int) -> Optional[str]:
		movie = self._movies.get(film_id)
		return movie.title if movie is not None else None

	def get_all_ids(self) -> np.ndarray:
		"""Every stored film id, in insertion order."""
		return self._movies.keys_as_int()

	def size(self) -> int:
		return self._movies.size

	def __contains__(self, film_id: object) -> bool:
		return film_id in self._movies
