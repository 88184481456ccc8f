"""
Store container.
Wires the movie, credits and ratings stores together so they share one
settings object and the ratings store can check film existence.
"""

from typing import Any, Dict, Optional  # type hints

from loguru import logger  # console logger

from .config import IndexSettings  # shared tunables
from .credits import Credits  # cast/crew aggregation
from .movies import MovieStore  # film records
from .ratings import Ratings  # rating aggregation


class Stores:
	"""
	The three stores of one dataset.
	"""

	def __init__(self, settings: Optional[IndexSettings] = None):
		self.settings = settings or IndexSettings()  # one config shared by every store
		self.movies = MovieStore(self.settings)  # film records, also the film catalog
		self.credits = Credits(self.settings)  # per-film and per-person credits
		self.ratings = Ratings(catalog=self.movies, settings=self.settings)  # ratings with film existence checks
		logger.debug(f"[Stores] Initialized | capacity={self.settings.initial_capacity}")

	def summary(self) -> Dict[str, Any]:
		"""Record counts per store, for logging and quick checks."""
		return {
			"movies": self.movies.size(),  # stored films
			"credited_films": self.credits.size(),  # films with credits
			"cast_members": len(self.credits.get_unique_cast()),  # distinct cast
			"crew_members": len(self.credits.get_unique_crew()),  # distinct crew
			"ratings": self.ratings.size(),  # stored ratings
		}
