"""
film-index - in-memory indexing for a movie dataset.

Chaining hash tables, a bounded rank heap and a growable sequence, composed
into movie, credits and ratings stores with point lookups and top-K queries.
"""

__version__ = "0.1.0"

from film_index.config import IndexSettings, configure_logging
from film_index.credits import Credits
from film_index.data_loader import DataLoader
from film_index.hash_table import ChainingHashTable
from film_index.models import CastCredit, CrewCredit, Genre, Movie, Person
from film_index.movies import FilmCatalog, MovieStore
from film_index.rank_heap import RankHeap, RankPair, select_top_k
from film_index.ratings import Ratings
from film_index.sequence import GrowableSequence, TypeMismatchError
from film_index.stores import Stores

__all__ = [
	# Containers
	"GrowableSequence",
	"TypeMismatchError",
	"ChainingHashTable",
	"RankHeap",
	"RankPair",
	"select_top_k",
	# Records
	"Person",
	"CastCredit",
	"CrewCredit",
	"Genre",
	"Movie",
	# Stores
	"MovieStore",
	"FilmCatalog",
	"Credits",
	"Ratings",
	"Stores",
	"DataLoader",
	# Configuration
	"IndexSettings",
	"configure_logging",
]
