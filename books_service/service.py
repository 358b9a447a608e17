"""
Query service over the book store.

Every operation is a read of the injected ``BookStore`` snapshot; list
operations return an empty list when nothing matches.
"""

from collections import Counter
from datetime import datetime, timezone, tzinfo
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

import structlog

from books_service.models import (
    Book, ByAuthorResponse, FormattedDateResponse,
    PagesMaxMinResponse, TitleCountResponse, WithoutDateResponse
)
from books_service.store import BookStore

logger = structlog.get_logger(__name__)

WORDS_PER_PAGE = 250
MOST_RECENT_LIMIT = 3


def _resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


class BookQueryService:
    """Derived views over a book store."""

    def __init__(
        self,
        store: BookStore,
        words_per_page: int = WORDS_PER_PAGE,
        most_recent_limit: int = MOST_RECENT_LIMIT,
        timezone_name: str = "UTC",
    ):
        self.store = store
        self.words_per_page = words_per_page
        self.most_recent_limit = most_recent_limit
        self.tz = _resolve_timezone(timezone_name)

    def filter_books(self, min_pages: int, keyword: str) -> List[Book]:
        """
        Get books longer than ``min_pages`` whose title contains ``keyword``.

        The keyword match is a case-sensitive substring check on the title.
        """
        logger.info("Filtering books", min_pages=min_pages, keyword=keyword)
        result = [
            book for book in self.store
            if book.pages > min_pages and keyword in book.title
        ]
        logger.info("Filtered books", count=len(result))
        return result

    def get_books_by_author(self, author_name: str) -> List[Book]:
        """Get books whose author full name matches, ignoring case."""
        logger.info("Getting books by author", author=author_name)
        wanted = author_name.lower()
        result = [
            book for book in self.store
            if book.author.full_name.lower() == wanted
        ]
        logger.info("Books found for author", author=author_name, count=len(result))
        return result

    def get_sorted_titles(self) -> List[str]:
        logger.info("Sorting book titles alphabetically")
        titles = sorted(book.title for book in self.store)
        logger.info("Sorted titles", count=len(titles))
        return titles

    def count_books_by_author(self) -> Dict[str, int]:
        logger.info("Counting books by author")
        counts = dict(Counter(book.author.full_name for book in self.store))
        logger.info("Counted books by author", authors=len(counts))
        return counts

    def get_book_title_count_response(self) -> TitleCountResponse:
        return TitleCountResponse(
            titles=self.get_sorted_titles(),
            author_count=self.count_books_by_author(),
        )

    def format_timestamp(self, timestamp: Optional[int], book_id: Optional[int] = None) -> Optional[str]:
        """
        Render epoch milliseconds as yyyy-MM-dd in the configured zone.

        Timestamps outside the years 1-9999 cannot be represented and give None.
        """
        if timestamp is None:
            return None
        try:
            moment = datetime.fromtimestamp(timestamp / 1000, tz=self.tz)
        except (OverflowError, ValueError, OSError) as e:
            logger.warning("Cannot format publication timestamp", book_id=book_id, timestamp=timestamp, error=str(e))
            return None
        return moment.strftime("%Y-%m-%d")

    def get_formatted_date(self) -> List[FormattedDateResponse]:
        logger.info("Formatting book publication dates")
        result = [
            FormattedDateResponse(
                book=book,
                formatted_date=self.format_timestamp(book.publication_timestamp, book.id),
            )
            for book in self.store
        ]
        logger.info("Formatted dates", count=len(result))
        return result

    def get_average_pages(self) -> float:
        logger.info("Calculating average number of pages")
        if self.store.is_empty:
            return 0.0
        average = sum(book.pages for book in self.store) / len(self.store)
        logger.info("Average pages", average=average)
        return average

    def get_book_with_most_pages(self) -> Optional[Book]:
        # max() keeps the first of equal elements
        book = max(self.store, key=lambda b: b.pages, default=None)
        logger.info("Book with most pages", title=book.title if book else None)
        return book

    def get_book_with_least_pages(self) -> Optional[Book]:
        book = min(self.store, key=lambda b: b.pages, default=None)
        logger.info("Book with least pages", title=book.title if book else None)
        return book

    def get_book_pages_max_min_response(self) -> PagesMaxMinResponse:
        return PagesMaxMinResponse(
            average=self.get_average_pages(),
            most_pages=self.get_book_with_most_pages(),
            least_pages=self.get_book_with_least_pages(),
        )

    def get_book_by_author_response(self) -> List[ByAuthorResponse]:
        """Group books per author and estimate how many words each wrote."""
        logger.info("Generating word count by author")
        result = []
        for author_name in self.count_books_by_author():
            books = self.get_books_by_author(author_name)
            result.append(
                ByAuthorResponse(
                    author_name=author_name,
                    books=books,
                    word_count=sum(book.pages for book in books) * self.words_per_page,
                )
            )
        logger.info("Generated word count by author", authors=len(result))
        return result

    def get_book_without_date_response(self) -> WithoutDateResponse:
        logger.info("Checking for duplicated authors and books without publication date")
        duplicated = any(count > 1 for count in self.count_books_by_author().values())
        books = [book for book in self.store if book.publication_timestamp is None]
        logger.info("Books without date", count=len(books), duplicated=duplicated)
        return WithoutDateResponse(duplicated=duplicated, books=books)

    def get_top_most_recent_books(self) -> List[Book]:
        """
        Get the most recently published books, newest first.

        Books without a timestamp are skipped. The sort is stable, so books
        sharing a timestamp keep their store order.
        """
        logger.info("Fetching most recent books", limit=self.most_recent_limit)
        dated = [book for book in self.store if book.publication_timestamp is not None]
        dated.sort(key=lambda b: b.publication_timestamp, reverse=True)
        result = dated[:self.most_recent_limit]
        logger.info("Found recent books", count=len(result))
        return result
