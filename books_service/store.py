"""
In-memory book store.

The collection is read once from a JSON file at startup and kept as an
immutable snapshot. Load errors are logged and replaced by an empty store so
that the service can always start.
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

import structlog
from pydantic import TypeAdapter

from books_service.models import Book

logger = structlog.get_logger(__name__)

_books_adapter = TypeAdapter(List[Book])


class BookStore:
    """Immutable, ordered collection of books."""

    def __init__(self, books: Tuple[Book, ...] = ()):
        self._books = tuple(books)

    @classmethod
    def from_books(cls, books: Iterable[Book]) -> "BookStore":
        return cls(tuple(books))

    @property
    def books(self) -> Tuple[Book, ...]:
        return self._books

    @property
    def is_empty(self) -> bool:
        return not self._books

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)


def load(path: Union[str, Path]) -> BookStore:
    """
    Load the book collection from a JSON file.

    Args:
        path: Path to a JSON array of book records

    Returns:
        BookStore with the parsed books, or an empty store if the file
        cannot be read or does not match the book schema
    """
    path = Path(path)
    try:
        books = _books_adapter.validate_json(path.read_bytes())
    except (OSError, ValueError) as e:
        logger.error("Error loading books", path=str(path), error=str(e))
        return BookStore()

    logger.info("Books loaded successfully", path=str(path), total_books=len(books))
    return BookStore.from_books(books)
