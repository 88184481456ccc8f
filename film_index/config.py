"""
Configuration for the film index.
Holds the tunables shared by the hash tables and the aggregation services,
and the logging setup used by scripts.
"""

import os  # environment-based overrides
import sys  # stderr sink for loguru
from typing import Optional  # type hints

from pydantic import BaseModel, Field, model_validator  # validated settings schema

from loguru import logger  # console logger


# Environment variable prefix for overrides, e.g. FILM_INDEX_INITIAL_CAPACITY=4307
ENV_PREFIX = "FILM_INDEX_"


class IndexSettings(BaseModel):
	"""
	Tunables for the in-memory index.
	Defaults match the sizes used for the full movie dataset.
	"""
	initial_capacity: int = Field(2153, ge=1, description="Bucket count for freshly created hash tables")
	nested_capacity: int = Field(17, ge=1, description="Bucket count for the per-user and per-film rating tables")
	max_load_factor: float = Field(1.5, gt=0, description="Rehash once size/capacity exceeds this")
	top_billing_order: int = Field(3, ge=0, description="Highest billing order counted as a starring role")
	min_rating: float = Field(0.0, description="Lowest accepted rating value")
	max_rating: float = Field(5.0, description="Highest accepted rating value")
	log_level: str = Field("INFO", description="loguru level used by configure_logging")

	@model_validator(mode="after")
	def _check_rating_bounds(self) -> "IndexSettings":
		if self.min_rating > self.max_rating:
			raise ValueError(f"min_rating ({self.min_rating}) must not exceed max_rating ({self.max_rating})")
		return self

	@classmethod
	def from_env(cls, environ: Optional[dict] = None) -> "IndexSettings":
		"""
		Build settings from FILM_INDEX_* variables, falling back to defaults.
		Values are passed as strings and coerced by pydantic.
		"""
		environ = os.environ if environ is None else environ  # allow injection in tests
		overrides = {}  # field name -> raw string value
		for name in cls.model_fields:
			raw = environ.get(ENV_PREFIX + name.upper())
			if raw is not None:
				overrides[name] = raw
		if overrides:
			logger.debug(f"[Config] Environment overrides: {sorted(overrides)}")
		return cls(**overrides)


def configure_logging(level: str = "INFO") -> None:
	"""Route loguru output to stderr at the given level."""
	logger.remove()  # drop the default handler so levels don't double up
	logger.add(sys.stderr, level=level.upper())
