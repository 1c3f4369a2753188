import os
import argparse

from dotenv import load_dotenv


DEFAULT_URI = "mongodb://localhost:27017"
DEFAULT_DB = "plp_bookstore"
DEFAULT_COLLECTION = "books"
DEFAULT_TIMEOUT_MS = 15000


class Config:
    """Where the runner connects: server uri, database and collection."""

    def __init__(self, mongo_uri=DEFAULT_URI, db_name=DEFAULT_DB,
                 collection_name=DEFAULT_COLLECTION, timeout_ms=DEFAULT_TIMEOUT_MS):
        if not mongo_uri:
            raise SystemExit("ERROR: Provide --mongo_uri or set $MONGODB_URI")
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.timeout_ms = int(timeout_ms)

    @classmethod
    def from_args(cls, args):
        return cls(
            mongo_uri=args.mongo_uri,
            db_name=args.db,
            collection_name=args.col,
            timeout_ms=args.timeout_ms,
        )

    def __repr__(self):
        return (f"Config(db={self.db_name!r}, col={self.collection_name!r}, "
                f"timeout_ms={self.timeout_ms})")


def add_connection_args(p: argparse.ArgumentParser):
    # .env first so its values become the argparse defaults
    load_dotenv()
    p.add_argument("--mongo_uri", type=str, default=os.getenv("MONGODB_URI", DEFAULT_URI),
                   help="MongoDB connection string. Falls back to $MONGODB_URI.")
    p.add_argument("--db", type=str, default=os.getenv("BOOKSTORE_DB", DEFAULT_DB),
                   help="Database holding the books collection.")
    p.add_argument("--col", type=str, default=os.getenv("BOOKSTORE_COLLECTION", DEFAULT_COLLECTION),
                   help="Collection with the book documents.")
    p.add_argument("--timeout_ms", type=int,
                   default=int(os.getenv("MONGO_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)),
                   help="serverSelectionTimeoutMS passed to the client.")
    return p
