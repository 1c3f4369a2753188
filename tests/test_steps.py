import pytest

from plp_bookstore import steps
from plp_bookstore.steps import STEPS, STEP_NAMES, select_steps


def test_fixed_order():
    assert [s.key for s in STEPS] == [
        "1.1", "1.2", "1.3", "1.4", "1.5", "1.6",
        "2.1", "2.2", "2.3", "2.4",
        "3.1", "3.2", "3.3", "3.4", "3.5", "3.6",
    ]
    assert STEP_NAMES[0] == "insert_book"
    assert STEP_NAMES[-1] == "stock_counts"
    assert len(set(STEP_NAMES)) == len(STEP_NAMES)


def test_sections_are_contiguous():
    sections = [s.section for s in STEPS]
    assert sections == sorted(sections, key=[steps.CRUD, steps.INDEX, steps.AGGREGATION].index)


def test_insert_book_sends_literal_document(col):
    steps.insert_book(col)
    col.insert_one.assert_called_once_with(steps.NEW_BOOK)
    # the module constant must not pick up an _id
    assert "_id" not in steps.NEW_BOOK
    assert steps.NEW_BOOK["title"] == "New JS Book"
    assert steps.NEW_BOOK["price"] == 25.99


def test_find_steps_return_lists(col):
    col.find.return_value = iter([{"title": "1984", "author": "George Orwell"}])
    assert steps.find_books_by_author(col) == [{"title": "1984", "author": "George Orwell"}]
    col.find.assert_called_once_with({"author": "George Orwell"})

    col.find.reset_mock()
    col.find.return_value = iter([])
    assert steps.find_all_books(col) == []
    col.find.assert_called_once_with()


def test_update_sets_only_price(col):
    steps.update_book_price(col)
    col.update_one.assert_called_once_with({"title": "The Hobbit"}, {"$set": {"price": 16.99}})


def test_delete_and_count(col):
    steps.delete_book(col)
    col.delete_one.assert_called_once_with({"title": "Moby Dick"})
    assert steps.count_books(col) == 12
    col.count_documents.assert_called_once_with({})


def test_index_steps(col):
    steps.create_author_index(col)
    steps.create_genre_price_index(col)
    steps.create_title_unique_index(col)
    calls = col.create_index.call_args_list
    assert calls[0].args == ([("author", 1)],)
    assert calls[1].args == ([("genre", 1), ("price", -1)],)
    assert calls[2].args == ([("title", 1)],)
    assert calls[2].kwargs == {"unique": True}


def test_list_indexes(col):
    col.list_indexes.return_value = iter([{"name": "_id_", "key": {"_id": 1}}])
    assert steps.list_indexes(col) == [{"name": "_id_", "key": {"_id": 1}}]


@pytest.mark.parametrize("name, pipeline", [
    ("books_per_genre", steps.BOOKS_PER_GENRE),
    ("avg_price_per_genre", steps.AVG_PRICE_PER_GENRE),
    ("most_expensive_per_author", steps.MOST_EXPENSIVE_PER_AUTHOR),
    ("total_pages_in_stock", steps.TOTAL_PAGES_IN_STOCK),
    ("books_by_genre_sorted", steps.BOOKS_BY_GENRE_SORTED),
    ("stock_counts", steps.STOCK_COUNTS),
])
def test_aggregation_steps_send_their_pipeline(col, name, pipeline):
    step = select_steps([name])[0]
    col.aggregate.return_value = iter([{"_id": "x"}])
    assert step.run(col) == [{"_id": "x"}]
    col.aggregate.assert_called_once_with(pipeline)


def test_sort_comes_before_group():
    assert list(steps.BOOKS_BY_GENRE_SORTED[0]) == ["$sort"]
    assert list(steps.TOTAL_PAGES_IN_STOCK[0]) == ["$match"]


def test_select_steps_keeps_order():
    picked = select_steps(["stock_counts", "insert_book", "count_books"])
    assert [s.name for s in picked] == ["insert_book", "count_books", "stock_counts"]


def test_select_steps_skip():
    picked = select_steps(skip=["insert_book", "delete_book"])
    assert len(picked) == len(STEPS) - 2
    assert "delete_book" not in [s.name for s in picked]


def test_select_steps_unknown():
    with pytest.raises(ValueError, match="drop_everything"):
        select_steps(["drop_everything"])


def test_printers(capsys):
    steps.show_all_books([{"title": "1984", "author": "George Orwell"},
                          {"title": "Emma", "author": "Jane Austen"}])
    steps.show_count_books(12)
    out = capsys.readouterr().out
    assert "1. 1984 by George Orwell" in out
    assert "2. Emma by Jane Austen" in out
    assert "1.6 Total books in collection: 12" in out
