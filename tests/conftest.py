from unittest.mock import MagicMock

import pytest

from plp_bookstore.config import Config


@pytest.fixture
def col():
    c = MagicMock(name="books")
    c.name = "books"
    c.count_documents.return_value = 12
    return c


@pytest.fixture
def client(col):
    cl = MagicMock(name="client")
    # client[db][col] -> the same fake collection
    cl.__getitem__.return_value.__getitem__.return_value = col
    return cl


@pytest.fixture
def client_factory(client):
    return MagicMock(return_value=client)


@pytest.fixture
def config():
    return Config("mongodb://fake:27017", "plp_bookstore", "books", timeout_ms=100)
