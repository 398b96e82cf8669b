"""Create the study planner schema in a SQLite file.

Usage: python init_db.py [--db PATH]

Safe to run repeatedly: tables that already exist are left as they are.
"""
import argparse
import logging
import pathlib
import sys

# Ensure `backend/` is on sys.path so `studyplanner` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from studyplanner.config import settings
from studyplanner.database import create_db_and_tables, make_engine

logger = logging.getLogger("studyplanner.init_db")


def run(db_path: pathlib.Path):
    """Provision every table in `db_path` and release the connection pool.

    Errors are not caught: a schema that cannot be created is fatal for
    whatever is about to serve from this file.
    """
    logger.info("Using database: %s", db_path)
    engine = make_engine(db_path)
    try:
        create_db_and_tables(engine)
    finally:
        engine.dispose()
    logger.info("Schema ready.")


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--db", type=pathlib.Path, default=settings.DB_PATH, help="SQLite file to initialise")
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)
    run(args.db)


if __name__ == '__main__':
    main()
