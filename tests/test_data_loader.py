"""
Tests for DataLoader: movies/credits JSONL, ratings CSV, malformed input handling.
Run: pytest tests/test_data_loader.py
"""

import json
import sys
from datetime import date, datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import pytest

from film_index.config import IndexSettings
from film_index.data_loader import DataLoader
from film_index.models import Genre
from film_index.stores import Stores

MOVIES = [
	{
		"id": 862, "title": "Toy Story", "original_title": "Toy Story",
		"overview": " Led by Woody, Andy's toys live happily in his room. ",
		"genres": [{"id": 16, "name": "Animation"}, {"id": 35, "name": "Comedy"}],
		"release_date": "1995-10-30", "budget": 30000000, "revenue": 373554033,
		"runtime": 81.0, "imdb_id": "tt0114709", "vote_count": 5415, "vote_average": 7.7,
	},
	{"id": 8844, "title": "Jumanji", "genres": "Adventure, Fantasy", "release_date": "not a date"},
	{"id": 949, "title": "Heat"},
]

CREDITS = [
	{
		"id": 862,
		"cast": [
			{"id": 31, "name": "Tom Hanks", "character": "Woody (voice)", "order": 0, "credit_id": "52fe4284c3a36847f8024f95"},
			{"id": 12898, "name": "Tim Allen", "character": "Buzz Lightyear (voice)", "order": 1},
			{"id": 7167, "name": "Don Rickles", "character": "Mr. Potato Head (voice)", "order": 4},
		],
		"crew": [
			{"id": 7879, "name": "John Lasseter", "job": "Director", "department": "Directing"},
		],
	},
	{"id": 949, "cast": [{"id": 1158, "name": "Al Pacino", "character": "Hanna", "order": 0}], "crew": []},
]

RATINGS_CSV = """userId,movieId,rating,timestamp
1,862,4.0,964982703
1,949,3.5,964981247
2,862,5.0,964982224
2,862,1.0,964982224
3,8844,9.0,964983815
x,862,2.0,964982224
4,31,2.5,
"""


def write_jsonl(path: Path, rows, extra_lines=()):
	lines = [json.dumps(row) for row in rows] + list(extra_lines)
	path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@pytest.fixture
def dataset(tmp_path):
	write_jsonl(tmp_path / DataLoader.MOVIES_FILE, MOVIES, ["", "{not json", json.dumps({"title": "no id"})])
	write_jsonl(tmp_path / DataLoader.CREDITS_FILE, CREDITS)
	(tmp_path / DataLoader.RATINGS_FILE).write_text(RATINGS_CSV, encoding="utf-8")
	return tmp_path


def test_load_movies_skips_bad_lines(dataset):
	loader = DataLoader()
	assert loader.load_movies_from_jsonl(str(dataset / DataLoader.MOVIES_FILE)) == 3
	movies = loader.stores.movies
	assert movies.size() == 3

	toy_story = movies.get(862)
	assert toy_story.overview == "Led by Woody, Andy's toys live happily in his room."
	assert toy_story.genres == (Genre(16, "Animation"), Genre(35, "Comedy"))
	assert toy_story.release == date(1995, 10, 30)
	assert toy_story.budget == 30000000
	assert toy_story.imdb_id == "tt0114709"

	jumanji = movies.get(8844)
	assert [g.name for g in jumanji.genres] == ["Adventure", "Fantasy"]
	assert jumanji.release is None
	assert movies.get(949).genres == ()


def test_duplicate_movies_are_not_counted(dataset):
	loader = DataLoader()
	path = str(dataset / DataLoader.MOVIES_FILE)
	assert loader.load_movies_from_jsonl(path) == 3
	assert loader.load_movies_from_jsonl(path) == 0
	assert loader.stores.movies.size() == 3


def test_load_credits(dataset):
	loader = DataLoader()
	assert loader.load_credits_from_jsonl(str(dataset / DataLoader.CREDITS_FILE)) == 2
	credits = loader.stores.credits
	assert [c.name for c in credits.get_film_cast(862)] == ["Tom Hanks", "Tim Allen", "Don Rickles"]
	assert credits.get_film_cast(862)[0].element_id == "52fe4284c3a36847f8024f95"
	assert credits.get_film_crew(862)[0].department == "Directing"
	assert credits.get_cast_stars_in_films(7167).tolist() == []
	assert credits.get_cast_films(1158).tolist() == [949]


def test_load_ratings_rejects_duplicates_and_bad_rows(dataset):
	loader = DataLoader()
	loader.load_movies_from_jsonl(str(dataset / DataLoader.MOVIES_FILE))
	added = loader.load_ratings_from_csv(str(dataset / DataLoader.RATINGS_FILE))
	# duplicate (2, 862), out-of-range 9.0 and the non-numeric user are dropped
	assert added == 4
	ratings = loader.stores.ratings
	assert ratings.size() == 4
	assert ratings.get_movie_average_rating(862) == pytest.approx(4.5)
	assert ratings.get_num_ratings(8844) == 0  # known film, only rating was rejected
	assert ratings.get_rating(1, 862).timestamp == datetime.fromtimestamp(964982703, tz=timezone.utc)
	assert ratings.get_rating(4, 31).timestamp is None


def test_load_directory_in_dependency_order(dataset):
	stores = DataLoader(Stores(IndexSettings(initial_capacity=11))).load_directory(str(dataset))
	assert stores.summary() == {
		"movies": 3,
		"credited_films": 2,
		"cast_members": 4,
		"crew_members": 1,
		"ratings": 4,
	}
	assert stores.ratings.get_movie_average_rating(949) == 3.5


def test_load_directory_tolerates_missing_files(tmp_path):
	write_jsonl(tmp_path / DataLoader.MOVIES_FILE, MOVIES[:1])
	stores = DataLoader().load_directory(str(tmp_path))
	assert stores.movies.size() == 1
	assert stores.credits.size() == 0
	assert stores.ratings.size() == 0


def test_out_of_range_timestamp_skips_only_that_row(tmp_path):
	path = tmp_path / DataLoader.RATINGS_FILE
	path.write_text("userId,movieId,rating,timestamp\n1,2,3.0,1e300\n5,6,2.0,inf\n3,4,4.0,100\n", encoding="utf-8")
	loader = DataLoader()
	assert loader.load_ratings_from_csv(str(path)) == 1
	assert loader.stores.ratings.get_rating(1, 2) is None
	assert loader.stores.ratings.get_rating(3, 4).timestamp == datetime.fromtimestamp(100, tz=timezone.utc)


def test_boolean_flags_and_extra_movie_fields(tmp_path):
	rows = [
		{
			"id": 1, "title": "A", "adult": "False", "video": "true",
			"homepage": "http://example.com/a",
			"spoken_languages": [{"iso_639_1": "en", "name": "English"}, {"iso_639_1": "fr", "name": "Français"}],
			"production_countries": [{"iso_3166_1": "US", "name": "United States of America"}],
			"production_companies": [{"id": 3, "name": "Pixar Animation Studios"}],
			"belongs_to_collection": {"id": 10194, "name": "Toy Story Collection"},
		},
		{"id": 2, "title": "B", "adult": True, "production_countries": "GB, IE"},
		{"id": 3, "title": "C", "adult": "True"},
	]
	write_jsonl(tmp_path / DataLoader.MOVIES_FILE, rows)
	loader = DataLoader()
	assert loader.load_movies_from_jsonl(str(tmp_path / DataLoader.MOVIES_FILE)) == 3
	first = loader.stores.movies.get(1)
	assert first.adult is False
	assert first.video is True
	assert first.homepage == "http://example.com/a"
	assert first.languages == ("en", "fr")
	assert first.countries == ("US",)
	assert first.companies == ("Pixar Animation Studios",)
	assert first.collection_id == 10194

	second = loader.stores.movies.get(2)
	assert second.adult is True
	assert second.countries == ("GB", "IE")
	assert second.collection_id is None
	assert second.languages == ()
	assert loader.stores.movies.get(3).adult is True


def test_missing_paths_raise(tmp_path):
	loader = DataLoader()
	with pytest.raises(FileNotFoundError):
		loader.load_directory(str(tmp_path / "nope"))
	with pytest.raises(FileNotFoundError):
		loader.load_movies_from_jsonl(str(tmp_path / "movies.jsonl"))
	with pytest.raises(FileNotFoundError):
		loader.load_ratings_from_csv(str(tmp_path / "ratings.csv"))


def main():
	sys.exit(pytest.main([__file__, "-q"]))


if __name__ == '__main__':
	main()
