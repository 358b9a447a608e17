"""
Pytest configuration and shared fixtures.
"""

import json

import pytest

from books_service.models import Author, Book
from books_service.service import BookQueryService
from books_service.store import BookStore


@pytest.fixture
def sample_books():
    """Three books: two by John Doe, one without publication date."""
    return [
        Book(
            id=1,
            title="Book One",
            pages=200,
            synopsis="",
            author=Author(name="John", first_surname="Doe", second_surname=""),
            publication_timestamp=1609459200000,  # 2021-01-01
        ),
        Book(
            id=2,
            title="Book Two",
            pages=150,
            synopsis="",
            author=Author(name="Jane", first_surname="Smith", second_surname=""),
            publication_timestamp=None,
        ),
        Book(
            id=3,
            title="Book Three",
            pages=300,
            synopsis="",
            author=Author(name="John", first_surname="Doe", second_surname=""),
            publication_timestamp=1672531200000,  # 2023-01-01
        ),
    ]


@pytest.fixture
def book_store(sample_books):
    return BookStore.from_books(sample_books)


@pytest.fixture
def book_service(book_store):
    return BookQueryService(book_store)


@pytest.fixture
def empty_service():
    return BookQueryService(BookStore())


@pytest.fixture
def books_file(tmp_path, sample_books):
    """Write the sample books to a JSON file using wire field names."""
    path = tmp_path / "books.json"
    path.write_text(
        json.dumps([book.model_dump(by_alias=True) for book in sample_books]),
        encoding="utf-8",
    )
    return path
