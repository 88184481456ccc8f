"""
Build the in-memory index from a dataset directory and report on it.

This script:
1) Loads movies, credits and ratings from data/ (or the directory given)
2) Logs store sizes
3) Logs the most rated films, the best average ratings and the most credited cast

Usage:
    poetry run python -m scripts.build_index [dataset_dir] [top_k]
"""

import sys  # command-line arguments
import time  # measure load time
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from film_index.config import IndexSettings, configure_logging  # tunables and log setup
from film_index.data_loader import DataLoader  # data ingestion
from film_index.stores import Stores  # store container


def main():
	settings = IndexSettings.from_env()  # FILM_INDEX_* overrides
	configure_logging(settings.log_level)  # apply log level before anything logs

	# Resolve dataset path and result size
	root = Path(__file__).resolve().parents[1]  # project root
	data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else root / 'data'  # input dataset
	top_k = int(sys.argv[2]) if len(sys.argv) > 2 else 10  # rows per ranking

	logger.info("=" * 60)
	logger.info("Build Film Index")
	logger.info("=" * 60)

	# 1) Load data
	logger.info(f"[1/3] Loading dataset from {data_dir}...")
	t0 = time.time()  # start timer
	stores = DataLoader(Stores(settings)).load_directory(str(data_dir))  # read dataset
	logger.info(f"[OK] Loaded in {time.time() - t0:.2f}s")  # report

	# 2) Store sizes
	logger.info("[2/3] Store sizes")
	for name, count in stores.summary().items():
		logger.info(f"  {name}: {count}")

	# 3) Rankings
	logger.info(f"[3/3] Top {top_k} rankings")
	for film_id in stores.ratings.get_most_rated_movies(top_k):
		film_id = int(film_id)
		logger.info(
			f"  most rated | {stores.movies.get_title(film_id) or film_id} | {stores.ratings.get_num_ratings(film_id)} ratings"
		)
	for film_id in stores.ratings.get_top_average_rated_movies(top_k):
		film_id = int(film_id)
		logger.info(
			f"  top average | {stores.movies.get_title(film_id) or film_id} | {stores.ratings.get_movie_average_rating(film_id):.2f}"
		)
	for person in stores.credits.get_most_cast_credits(top_k):
		logger.info(f"  most credited | {person.name} | {stores.credits.get_num_cast_credits(person.id)} credits")

	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke builder
