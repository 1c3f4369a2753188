# steps.py — the fixed query sequence run against the books collection.
# Each step is a plain function of the collection; the printer next to it
# formats whatever the driver returned.

from pprint import pprint
from typing import Any, Callable, List


CRUD = "CRUD OPERATIONS"
INDEX = "INDEX OPERATIONS"
AGGREGATION = "AGGREGATION OPERATIONS"


class Step:
    def __init__(self, key: str, name: str, section: str,
                 run: Callable[[Any], Any], show: Callable[[Any], None]):
        self.key = key
        self.name = name
        self.section = section
        self.run = run
        self.show = show

    def __repr__(self):
        return f"Step({self.key} {self.name})"


# =========================
# CRUD
# =========================

NEW_BOOK = {
    "title": "New JS Book",
    "author": "Node Author",
    "genre": "Programming",
    "published_year": 2025,
    "price": 25.99,
    "in_stock": True,
    "pages": 300,
    "publisher": "Tech Press",
}

AUTHOR_FILTER = {"author": "George Orwell"}
UPDATE_FILTER = {"title": "The Hobbit"}
UPDATE_DOC = {"$set": {"price": 16.99}}
DELETE_FILTER = {"title": "Moby Dick"}


def insert_book(col):
    # copy: insert_one adds _id to the dict it is given
    return col.insert_one(dict(NEW_BOOK))

def show_insert_book(res):
    print(f"\n1.1 Inserted: {NEW_BOOK['title']}")


def find_all_books(col):
    return list(col.find())

def show_all_books(books):
    print("\n1.2 All Books:")
    for i, book in enumerate(books, start=1):
        print(f"    {i}. {book.get('title')} by {book.get('author')}")


def find_books_by_author(col):
    return list(col.find(AUTHOR_FILTER))

def show_books_by_author(books):
    print(f"\n1.3 Books by {AUTHOR_FILTER['author']}:")
    for i, book in enumerate(books, start=1):
        print(f"    {i}. {book.get('title')}")


def update_book_price(col):
    return col.update_one(UPDATE_FILTER, UPDATE_DOC)

def show_update_book_price(res):
    print(f"\n1.4 Updated {UPDATE_FILTER['title']} price to {UPDATE_DOC['$set']['price']} "
          f"(matched={res.matched_count}, modified={res.modified_count})")


def delete_book(col):
    return col.delete_one(DELETE_FILTER)

def show_delete_book(res):
    print(f"1.5 Deleted: {DELETE_FILTER['title']} (deleted={res.deleted_count})")


def count_books(col):
    return col.count_documents({})

def show_count_books(total):
    print(f"\n1.6 Total books in collection: {total}")


# =========================
# Indexes
# =========================

AUTHOR_INDEX = [("author", 1)]
GENRE_PRICE_INDEX = [("genre", 1), ("price", -1)]
TITLE_INDEX = [("title", 1)]


def create_author_index(col):
    return col.create_index(AUTHOR_INDEX)

def show_author_index(name):
    print(f"\n2.1 Created index on author ({name})")


def create_genre_price_index(col):
    return col.create_index(GENRE_PRICE_INDEX)

def show_genre_price_index(name):
    print(f"2.2 Created compound index on genre and price ({name})")


def create_title_unique_index(col):
    return col.create_index(TITLE_INDEX, unique=True)

def show_title_unique_index(name):
    print(f"2.3 Created unique index on title ({name})")


def list_indexes(col):
    return list(col.list_indexes())

def show_indexes(indexes):
    print("\n2.4 Current Indexes:")
    pprint([dict(ix) for ix in indexes])


# =========================
# Aggregations
# =========================

BOOKS_PER_GENRE = [
    {"$group": {"_id": "$genre", "total": {"$sum": 1}}},
]
AVG_PRICE_PER_GENRE = [
    {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
]
MOST_EXPENSIVE_PER_AUTHOR = [
    {"$group": {"_id": "$author", "maxPrice": {"$max": "$price"}, "book": {"$first": "$title"}}},
]
TOTAL_PAGES_IN_STOCK = [
    {"$match": {"in_stock": True}},
    {"$group": {"_id": None, "totalPages": {"$sum": "$pages"}}},
]
BOOKS_BY_GENRE_SORTED = [
    {"$sort": {"price": -1}},
    {"$group": {"_id": "$genre", "books": {"$push": "$title"}}},
]
STOCK_COUNTS = [
    {"$group": {"_id": "$in_stock", "count": {"$sum": 1}}},
]


def _aggregate(pipeline: List[dict]):
    def run(col):
        return list(col.aggregate(pipeline))
    return run


def _printer(heading: str):
    def show(rows):
        print(heading)
        pprint(rows)
    return show


# =========================
# Order
# =========================

STEPS = (
    Step("1.1", "insert_book", CRUD, insert_book, show_insert_book),
    Step("1.2", "find_all_books", CRUD, find_all_books, show_all_books),
    Step("1.3", "find_books_by_author", CRUD, find_books_by_author, show_books_by_author),
    Step("1.4", "update_book_price", CRUD, update_book_price, show_update_book_price),
    Step("1.5", "delete_book", CRUD, delete_book, show_delete_book),
    Step("1.6", "count_books", CRUD, count_books, show_count_books),

    Step("2.1", "create_author_index", INDEX, create_author_index, show_author_index),
    Step("2.2", "create_genre_price_index", INDEX, create_genre_price_index, show_genre_price_index),
    Step("2.3", "create_title_unique_index", INDEX, create_title_unique_index, show_title_unique_index),
    Step("2.4", "list_indexes", INDEX, list_indexes, show_indexes),

    Step("3.1", "books_per_genre", AGGREGATION,
         _aggregate(BOOKS_PER_GENRE), _printer("\n3.1 Books per genre:")),
    Step("3.2", "avg_price_per_genre", AGGREGATION,
         _aggregate(AVG_PRICE_PER_GENRE), _printer("\n3.2 Average price per genre:")),
    Step("3.3", "most_expensive_per_author", AGGREGATION,
         _aggregate(MOST_EXPENSIVE_PER_AUTHOR), _printer("\n3.3 Most expensive book per author:")),
    Step("3.4", "total_pages_in_stock", AGGREGATION,
         _aggregate(TOTAL_PAGES_IN_STOCK), _printer("\n3.4 Total pages of in-stock books:")),
    Step("3.5", "books_by_genre_sorted", AGGREGATION,
         _aggregate(BOOKS_BY_GENRE_SORTED), _printer("\n3.5 Books grouped by genre (sorted by price):")),
    Step("3.6", "stock_counts", AGGREGATION,
         _aggregate(STOCK_COUNTS), _printer("\n3.6 In-stock vs Out-of-stock counts:")),
)

STEP_NAMES = [s.name for s in STEPS]


def select_steps(only=None, skip=None):
    """Subset of STEPS by name, always in STEPS order."""
    wanted = set(only) if only else set(STEP_NAMES)
    dropped = set(skip or [])
    unknown = (wanted | dropped) - set(STEP_NAMES)
    if unknown:
        raise ValueError(f"unknown step(s): {', '.join(sorted(unknown))}")
    return [s for s in STEPS if s.name in wanted and s.name not in dropped]
