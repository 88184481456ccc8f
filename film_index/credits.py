"""
Credits store.
Aggregates cast and crew credits per film and per person, and answers
membership and "most credited" queries over them.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np  # id arrays

from rapidfuzz import fuzz, process, utils  # fuzzy name matching

from loguru import logger  # console logger

from .config import IndexSettings  # shared tunables
from .hash_table import ChainingHashTable  # id-keyed tables
from .models import CastCredit, CrewCredit, Person  # value records
from .rank_heap import RankPair, heap_sort_positions, select_top_k  # ranking helpers
from .sequence import GrowableSequence  # per-person film lists


class FilmCredits:
	"""
	Snapshot of one film's credits, sorted once on creation: cast by billing
	order, crew by person id.
	"""

	__slots__ = ["cast", "crew"]

	def __init__(self, cast: Sequence[CastCredit], crew: Sequence[CrewCredit]):
		cast_positions = heap_sort_positions([credit.order for credit in cast])
		crew_positions = heap_sort_positions([credit.id for credit in crew])
		self.cast: Tuple[CastCredit, ...] = tuple(cast[int(pos)] for pos in cast_positions)
		self.crew: Tuple[CrewCredit, ...] = tuple(crew[int(pos)] for pos in crew_positions)


class CastRecord:
	"""Everything known about one cast member across the stored films."""

	__slots__ = ["person", "films", "starring_films", "credit_count"]

	def __init__(self, person: Person):
		self.person = person
		self.films: GrowableSequence[int] = GrowableSequence()
		self.starring_films: GrowableSequence[int] = GrowableSequence(initial_capacity=0)
		self.credit_count = 0  # one per role, so it can exceed len(films)


class CrewRecord:
	"""Everything known about one crew member across the stored films."""

	__slots__ = ["person", "films"]

	def __init__(self, person: Person):
		self.person = person
		self.films: GrowableSequence[int] = GrowableSequence()


class Credits:
	"""
	Per-film credit snapshots plus per-person cast and crew records.

	The person records are derived data: add() and remove() keep them in
	step with the film snapshots, and a person record disappears once its
	last film is removed.
	"""

	def __init__(self, settings: Optional[IndexSettings] = None):
		self.settings = settings or IndexSettings()
		capacity = self.settings.initial_capacity
		load = self.settings.max_load_factor
		self._films: ChainingHashTable[int, FilmCredits] = ChainingHashTable(capacity, load)
		self._cast: ChainingHashTable[int, CastRecord] = ChainingHashTable(capacity, load)
		self._crew: ChainingHashTable[int, CrewRecord] = ChainingHashTable(capacity, load)

	def _is_starring(self, credit: CastCredit) -> bool:
		return credit.order <= self.settings.top_billing_order

	def add(self, cast: Sequence[CastCredit], crew: Sequence[CrewCredit], film_id: int) -> bool:
		"""
		Store the credits of a film. Returns False (nothing changes) if the
		film already has credits stored.
		"""
		if not self._films.add(film_id, FilmCredits(cast, crew)):
			logger.debug(f"[Credits] Rejected duplicate film {film_id}")
			return False

		for credit in cast:
			record = self._cast.get(credit.id)
			if record is None:
				record = CastRecord(credit.to_person())
				self._cast.add(credit.id, record)
			record.films.add_unique(film_id)
			if self._is_starring(credit):
				record.starring_films.add_unique(film_id)
			record.credit_count += 1

		for credit in crew:
			record = self._crew.get(credit.id)
			if record is None:
				record = CrewRecord(credit.to_person())
				self._crew.add(credit.id, record)
			record.films.add_unique(film_id)

		return True

	def remove(self, film_id: int) -> bool:
		"""
		Remove a film's credits and undo its effect on every person record.
		Returns False if the film is unknown.
		"""
		film = self._films.get(film_id)
		if film is None:
			return False
		self._films.remove(film_id)

		for credit in film.cast:
			record = self._cast.get(credit.id)
			record.films.remove(film_id)  # False for a second role, already removed
			if self._is_starring(credit):
				record.starring_films.remove(film_id)
			record.credit_count -= 1
			if record.credit_count == 0:
				self._cast.remove(credit.id)

		for person_id in {credit.id for credit in film.crew}:
			record = self._crew.get(person_id)
			record.films.remove(film_id)
			if len(record.films) == 0:
				self._crew.remove(person_id)

		logger.debug(f"[Credits] Removed film {film_id} ({len(film.cast)} cast, {len(film.crew)} crew)")
		return True

	def get_film_cast(self, film_id: int) -> Tuple[CastCredit, ...]:
		"""Cast credits in billing order; empty if the film is unknown."""
		film = self._films.get(film_id)
		return film.cast if film is not None else ()

	def get_film_crew(self, film_id: int) -> Tuple[CrewCredit, ...]:
		"""Crew credits in person id order; empty if the film is unknown."""
		film = self._films.get(film_id)
		return film.crew if film is not None else ()

	def size_of_cast(self, film_id: int) -> int:
		film = self._films.get(film_id)
		return len(film.cast) if film is not None else -1

	def size_of_crew(self, film_id: int) -> int:
		film = self._films.get(film_id)
		return len(film.crew) if film is not None else -1

	@staticmethod
	def _collect_people(records: Iterable, name_filter: Optional[str] = None) -> List[Person]:
		people: GrowableSequence[Person] = GrowableSequence()
		for record in records:
			if name_filter is None or name_filter in record.person.name:
				people.append(record.person)
		return people.to_list(Person)

	def get_unique_cast(self) -> List[Person]:
		return self._collect_people(self._cast.values())

	def get_unique_crew(self) -> List[Person]:
		return self._collect_people(self._crew.values())

	def find_cast(self, substring: str) -> List[Person]:
		"""Cast members whose name contains substring (case-sensitive)."""
		return self._collect_people(self._cast.values(), substring)

	def find_crew(self, substring: str) -> List[Person]:
		"""Crew members whose name contains substring (case-sensitive)."""
		return self._collect_people(self._crew.values(), substring)

	@staticmethod
	def _fuzzy_people(table: ChainingHashTable, name: str, limit: int, score_cutoff: float) -> List[Person]:
		if not name or not name.strip():
			return []
		choices: Dict[int, str] = {person_id: record.person.name for person_id, record in table.items()}
		matches = process.extract(
			name.strip(), choices, scorer=fuzz.WRatio, processor=utils.default_process,
			limit=limit, score_cutoff=score_cutoff,
		)
		logger.debug(f"[Credits] Fuzzy '{name}' -> {[(m[0], round(m[1], 1)) for m in matches]}")
		return [table.get(person_id).person for _, _, person_id in matches]

	def find_cast_fuzzy(self, name: str, limit: int = 10, score_cutoff: float = 80.0) -> List[Person]:
		"""Best fuzzy matches for a (possibly misspelled) cast name, best first."""
		return self._fuzzy_people(self._cast, name, limit, score_cutoff)

	def find_crew_fuzzy(self, name: str, limit: int = 10, score_cutoff: float = 80.0) -> List[Person]:
		"""Best fuzzy matches for a (possibly misspelled) crew name, best first."""
		return self._fuzzy_people(self._crew, name, limit, score_cutoff)

	def get_cast(self, cast_id: int) -> Optional[Person]:
		record = self._cast.get(cast_id)
		return record.person if record is not None else None

	def get_crew(self, crew_id: int) -> Optional[Person]:
		record = self._crew.get(crew_id)
		return record.person if record is not None else None

	def get_cast_films(self, cast_id: int) -> np.ndarray:
		record = self._cast.get(cast_id)
		if record is None:
			return np.empty(0, dtype=np.int64)
		return record.films.to_int_array()

	def get_crew_films(self, crew_id: int) -> np.ndarray:
		record = self._crew.get(crew_id)
		if record is None:
			return np.empty(0, dtype=np.int64)
		return record.films.to_int_array()

	def get_cast_stars_in_films(self, cast_id: int) -> np.ndarray:
		"""Films where the cast member was billed within the top billing orders."""
		record = self._cast.get(cast_id)
		if record is None:
			return np.empty(0, dtype=np.int64)
		return record.starring_films.to_int_array()

	def get_most_cast_credits(self, num_results: int) -> List[Person]:
		"""Cast members with the most credits, highest first."""
		top_ids = select_top_k(
			(RankPair(record.credit_count, person_id) for person_id, record in self._cast.items()),
			num_results,
		)
		return [self._cast.get(int(person_id)).person for person_id in top_ids]

	def get_num_cast_credits(self, cast_id: int) -> int:
		record = self._cast.get(cast_id)
		return record.credit_count if record is not None else -1

	def size(self) -> int:
		"""Number of films with stored credits."""
		return self._films.size
