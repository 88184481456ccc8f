"""
Data loading module.
Reads movies and credits from JSON Lines and ratings from CSV, and feeds them
into the stores.
"""

# Standard libs for JSON/CSV parsing, dates, typing, and paths
import csv  # read ratings.csv
import json  # read JSON lines
from datetime import date, datetime, timezone  # release dates and rating timestamps
from typing import Any, Dict, Iterator, List, Optional, Tuple  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our value records and the store container they are loaded into
from .models import CastCredit, CrewCredit, Genre, Movie  # structured records
from .stores import Stores  # movie/credits/ratings container

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading dataset files into a Stores instance.
	Malformed records are logged and skipped; a missing file raises.
	"""

	MOVIES_FILE = 'movies.jsonl'  # one movie object per line
	CREDITS_FILE = 'credits.jsonl'  # {"id": film_id, "cast": [...], "crew": [...]} per line
	RATINGS_FILE = 'ratings.csv'  # userId,movieId,rating,timestamp

	def __init__(self, stores: Optional[Stores] = None):
		"""Load into the given stores, or into a fresh set."""
		self.stores = stores or Stores()  # target container

	def load_directory(self, directory: str) -> Stores:
		"""
		Load every dataset file present in a directory. Movies are loaded
		first so that ratings can see which films exist.
		"""
		directory = Path(directory)  # normalize path
		if not directory.is_dir():
			raise FileNotFoundError(f"Dataset directory not found: {directory}")

		# Each file is optional; load what is there, in dependency order
		if (directory / self.MOVIES_FILE).exists():
			self.load_movies_from_jsonl(str(directory / self.MOVIES_FILE))
		if (directory / self.CREDITS_FILE).exists():
			self.load_credits_from_jsonl(str(directory / self.CREDITS_FILE))
		if (directory / self.RATINGS_FILE).exists():
			self.load_ratings_from_csv(str(directory / self.RATINGS_FILE))

		logger.info(f"[DataLoader] Loaded dataset from {directory}: {self.stores.summary()}")  # summary
		return self.stores  # populated container

	def _read_jsonl(self, filepath: Path) -> Iterator[Tuple[int, Dict[str, Any]]]:
		"""Yield (line number, parsed object) for every valid JSON line."""
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				line = line.strip()
				if not line:  # tolerate blank lines
					continue
				try:
					yield line_num, json.loads(line)  # parse JSON object per line
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line

	@staticmethod
	def _require(filepath: str, kind: str) -> Path:
		filepath = Path(filepath)  # normalize path
		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"{kind} data file not found: {filepath}")
		return filepath

	def load_movies_from_jsonl(self, filepath: str) -> int:
		"""
		Load movies from a JSON Lines file into the movie store.
		Returns the number of movies added.
		"""
		filepath = self._require(filepath, 'Movie')
		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		added = 0  # count of accepted movies
		for line_num, data in self._read_jsonl(filepath):
			try:
				movie = self._parse_movie_data(data)  # convert dict -> Movie
			except (KeyError, TypeError, ValueError) as e:
				logger.warning(f"[DataLoader] Error parsing movie at line {line_num}: {e}")  # unexpected issue
				continue  # move on
			if self.stores.movies.add(movie):
				added += 1
			else:
				logger.warning(f"[DataLoader] Duplicate movie id {movie.id} at line {line_num}")  # already stored

		logger.info(f"[DataLoader] Successfully loaded {added} movies.")  # summary
		return added

	def load_credits_from_jsonl(self, filepath: str) -> int:
		"""
		Load per-film cast and crew lists into the credits store.
		Returns the number of films whose credits were added.
		"""
		filepath = self._require(filepath, 'Credits')
		logger.info(f"[DataLoader] Loading credits from {filepath}...")  # log action

		added = 0  # count of accepted films
		for line_num, data in self._read_jsonl(filepath):
			try:
				film_id = int(data['id'])  # film the credits belong to
				cast = [self._parse_cast_credit(c) for c in data.get('cast') or []]  # acting roles
				crew = [self._parse_crew_credit(c) for c in data.get('crew') or []]  # crew jobs
			except (KeyError, TypeError, ValueError) as e:
				logger.warning(f"[DataLoader] Error parsing credits at line {line_num}: {e}")
				continue
			if self.stores.credits.add(cast, crew, film_id):
				added += 1
			else:
				logger.warning(f"[DataLoader] Duplicate credits for film {film_id} at line {line_num}")

		logger.info(f"[DataLoader] Successfully loaded credits for {added} films.")  # summary
		return added

	def load_ratings_from_csv(self, filepath: str) -> int:
		"""
		Load ratings from a CSV with columns userId, movieId, rating, timestamp
		(unix seconds). Returns the number of ratings added.
		"""
		filepath = self._require(filepath, 'Ratings')
		logger.info(f"[DataLoader] Loading ratings from {filepath}...")  # log action

		added = 0  # count of accepted ratings
		with open(filepath, 'r', encoding='utf-8', newline='') as f:
			reader = csv.DictReader(f)  # header row names the columns
			for row_num, row in enumerate(reader, 2):  # header is row 1
				try:
					user_id = int(row['userId'])
					film_id = int(row['movieId'])
					value = float(row['rating'])
					timestamp = self._parse_timestamp(row.get('timestamp'))
				except (KeyError, TypeError, ValueError) as e:
					logger.warning(f"[DataLoader] Skipping invalid rating at row {row_num}: {e}")
					continue
				if self.stores.ratings.add(user_id, film_id, value, timestamp):
					added += 1

		logger.info(f"[DataLoader] Successfully loaded {added} ratings.")  # summary
		return added

	def _parse_movie_data(self, data: Dict) -> Movie:
		"""
		Convert a raw dictionary (from file) into a Movie record with safe defaults.
		"""
		return Movie(
			id=int(data['id']),  # id is mandatory
			title=(data.get('title') or '').strip(),  # display title
			original_title=(data.get('original_title') or '').strip(),
			overview=(data.get('overview') or '').strip(),
			tagline=(data.get('tagline') or '').strip(),
			status=data.get('status') or '',
			genres=tuple(self._parse_genres(data.get('genres'))),  # tuple keeps Movie hashable
			release=self._parse_date(data.get('release_date')),  # optional date
			budget=int(data.get('budget') or 0),
			revenue=int(data.get('revenue') or 0),
			original_language=data.get('original_language') or '',
			runtime=float(data.get('runtime') or 0.0),
			imdb_id=data.get('imdb_id') or None,
			popularity=float(data.get('popularity') or 0.0),
			vote_count=int(data.get('vote_count') or 0),
			vote_average=float(data.get('vote_average') or 0.0),
			adult=self._parse_bool(data.get('adult')),  # exports may encode as "False"
			video=self._parse_bool(data.get('video')),
			poster_path=data.get('poster_path') or None,
			homepage=data.get('homepage') or None,
			languages=self._parse_names(data.get('spoken_languages'), 'iso_639_1'),
			countries=self._parse_names(data.get('production_countries'), 'iso_3166_1'),
			companies=self._parse_names(data.get('production_companies'), 'name'),
			collection_id=self._parse_collection_id(data.get('belongs_to_collection')),
		)

	@staticmethod
	def _parse_bool(value) -> bool:
		"""Booleans, numbers, or strings such as "True"/"false"/"1"."""
		if isinstance(value, str):
			return value.strip().lower() in ('true', '1', 'yes')
		return bool(value)

	@staticmethod
	def _parse_names(value, key: str) -> Tuple[str, ...]:
		"""
		Accept a list of objects (taking `key`, falling back to "name"), a
		list of strings, or a comma-separated string.
		"""
		if not value:  # missing field
			return ()
		if isinstance(value, str):
			value = value.split(',')
		names = []
		for item in value:
			if isinstance(item, dict):
				item = item.get(key) or item.get('name') or ''
			item = str(item).strip()
			if item:
				names.append(item)
		return tuple(names)

	@staticmethod
	def _parse_collection_id(value) -> Optional[int]:
		"""Collection object ({"id": ...}) or bare id; None when absent."""
		if not value:
			return None
		if isinstance(value, dict):
			value = value.get('id')
		return int(value) if value is not None else None

	def _parse_genres(self, value) -> List[Genre]:
		"""
		Accept a list of {"id", "name"} objects, a list of names, or a
		comma-separated string.
		"""
		if not value:  # missing field
			return []
		if isinstance(value, str):  # comma-separated string
			value = [item.strip() for item in value.split(',') if item.strip()]
		genres = []
		for position, item in enumerate(value):
			if isinstance(item, dict):
				genres.append(Genre(int(item.get('id', position)), str(item.get('name', '')).strip()))
			else:
				genres.append(Genre(position, str(item).strip()))  # names only; position stands in for the id
		return genres

	def _parse_cast_credit(self, data: Dict) -> CastCredit:
		return CastCredit(
			id=int(data['id']),
			name=(data.get('name') or '').strip(),
			character=(data.get('character') or '').strip(),
			order=int(data.get('order', 0)),
			element_id=str(data.get('credit_id') or ''),
			gender=int(data.get('gender') or 0),
			profile_path=data.get('profile_path') or None,
		)

	def _parse_crew_credit(self, data: Dict) -> CrewCredit:
		return CrewCredit(
			id=int(data['id']),
			name=(data.get('name') or '').strip(),
			job=(data.get('job') or '').strip(),
			department=(data.get('department') or '').strip(),
			element_id=str(data.get('credit_id') or ''),
			gender=int(data.get('gender') or 0),
			profile_path=data.get('profile_path') or None,
		)

	@staticmethod
	def _parse_date(value) -> Optional[date]:
		"""ISO date string -> date; empty or malformed values become None."""
		if not value:
			return None
		try:
			return date.fromisoformat(str(value)[:10])
		except ValueError:
			logger.debug(f"[DataLoader] Ignoring malformed release date {value!r}")
			return None

	@staticmethod
	def _parse_timestamp(value) -> Optional[datetime]:
		"""Unix seconds -> timezone-aware datetime; missing values become None."""
		if value is None or value == '':
			return None
		seconds = float(value)  # ValueError on non-numeric text
		try:
			return datetime.fromtimestamp(int(seconds), tz=timezone.utc)
		except (OverflowError, OSError) as e:
			# Out of range for the platform clock; let the row handler skip it
			raise ValueError(f"timestamp {value!r} out of range") from e
