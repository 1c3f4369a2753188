# seed.py — load the sample book catalogue into the books collection.

import argparse
import json
from pathlib import Path

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .config import Config, add_connection_args


DATA_PATH = Path(__file__).parent / "data" / "books.json"


def load_books(path=None):
    with open(path or DATA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def seed_books(col, books, drop=False):
    """Insert the books, optionally after dropping the collection. Returns the inserted count."""
    if drop:
        col.drop()
        print(f"[seed] dropped existing {col.name} collection")
    if not books:
        print("[seed] nothing to insert")
        return 0
    # insert_many mutates the dicts it is given
    res = col.insert_many([dict(b) for b in books])
    n = len(res.inserted_ids)
    print(f"[seed] inserted {n} books into {col.name}")
    return n


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Seed the bookstore collection with sample books.")
    add_connection_args(p)
    p.add_argument("--drop", action="store_true",
                   help="Drop the collection before inserting (full refresh).")
    p.add_argument("--data", type=str, default=None,
                   help="JSON file with the books to insert. Defaults to the bundled catalogue.")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = Config.from_args(args)
    try:
        books = load_books(args.data)
    except (OSError, ValueError) as e:
        raise SystemExit(f"ERROR: Could not read books from {args.data or DATA_PATH}: {e}")

    try:
        client = MongoClient(config.mongo_uri, serverSelectionTimeoutMS=config.timeout_ms)
    except PyMongoError as e:
        print(f"[seed][ERROR] {e}")
        raise SystemExit(1)
    try:
        col = client[config.db_name][config.collection_name]
        seed_books(col, books, drop=args.drop)
        print(f"Seeded {col.count_documents({})} books")
    except PyMongoError as e:
        print(f"[seed][ERROR] {e}")
        raise SystemExit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
