"""
Data models for the film index.
Immutable value records handed to the stores by the loader.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from datetime import date  # release dates
from typing import Optional, Tuple  # optional values and fixed-size tuples


@dataclass(frozen=True)
class Person:
	"""
	A cast or crew member, independent of any one film.
	"""
	id: int  # unique person id shared by all of their credits
	name: str  # display name as given by the dataset
	profile_path: Optional[str] = None  # optional path to a profile image


@dataclass(frozen=True)
class CastCredit:
	"""
	One acting role in one film. A person with two roles in a film has two credits.
	"""
	id: int  # person id
	name: str  # person name
	character: str  # character played in this role
	order: int  # billing order; lower means more prominent
	element_id: str = ""  # dataset-specific credit id
	gender: int = 0  # dataset gender code (0 = unknown)
	profile_path: Optional[str] = None  # optional profile image path

	def to_person(self) -> Person:
		"""Drop the film-specific fields."""
		return Person(self.id, self.name, self.profile_path)


@dataclass(frozen=True)
class CrewCredit:
	"""
	One crew job in one film.
	"""
	id: int  # person id
	name: str  # person name
	job: str  # e.g. "Director"
	department: str = ""  # e.g. "Directing"
	element_id: str = ""  # dataset-specific credit id
	gender: int = 0  # dataset gender code (0 = unknown)
	profile_path: Optional[str] = None  # optional profile image path

	def to_person(self) -> Person:
		"""Drop the film-specific fields."""
		return Person(self.id, self.name, self.profile_path)


@dataclass(frozen=True)
class Genre:
	id: int  # dataset genre id
	name: str  # display name


@dataclass(frozen=True)
class Movie:
	"""
	Represents a single film and the metadata the dataset provides for it.
	"""
	id: int  # unique film id
	title: str  # display title
	original_title: str = ""  # title in the original language
	overview: str = ""  # short synopsis
	tagline: str = ""  # marketing tagline
	status: str = ""  # e.g. "Released"
	genres: Tuple[Genre, ...] = field(default_factory=tuple)  # genres attached to the film
	release: Optional[date] = None  # release date if known
	budget: int = 0  # production budget (0 when unknown)
	revenue: int = 0  # box office revenue (0 when unknown)
	original_language: str = ""  # ISO language code
	runtime: float = 0.0  # minutes
	imdb_id: Optional[str] = None  # optional IMDb identifier
	popularity: float = 0.0  # popularity score from the dataset
	vote_count: int = 0  # dataset-provided vote count
	vote_average: float = 0.0  # dataset-provided vote average
	adult: bool = False  # adult content flag
	video: bool = False  # dataset video flag
	poster_path: Optional[str] = None  # optional poster image path
	homepage: Optional[str] = None  # official site, if any
	languages: Tuple[str, ...] = field(default_factory=tuple)  # spoken language codes
	countries: Tuple[str, ...] = field(default_factory=tuple)  # production country codes
	companies: Tuple[str, ...] = field(default_factory=tuple)  # production company names
	collection_id: Optional[int] = None  # franchise/collection the film belongs to
