"""
Pydantic models for the Books Service API.

``Author`` and ``Book`` mirror the records stored in ``books.json``. The
remaining models are response shapes derived on demand from the book
collection. Wire names are camelCase; Python attributes are snake_case.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Author(CamelModel):
    """Author embedded in a book record."""
    name: str = Field(..., description="Given name")
    first_surname: Optional[str] = Field(None, description="First surname")
    second_surname: Optional[str] = Field(None, description="Second surname")

    @property
    def full_name(self) -> str:
        """Given name plus first surname, used to group and match authors."""
        if self.first_surname:
            return f"{self.name} {self.first_surname}"
        return self.name


class Book(CamelModel):
    """A single book record."""
    id: int = Field(..., description="Book identifier")
    title: str = Field(..., description="Book title")
    pages: int = Field(..., description="Number of pages")
    synopsis: str = Field("", description="Short synopsis")
    author: Author = Field(..., description="Book author")
    publication_timestamp: Optional[int] = Field(
        None, description="Publication date as epoch milliseconds"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Cien años de soledad",
                "pages": 471,
                "synopsis": "La historia de la familia Buendía en Macondo.",
                "author": {
                    "name": "Gabriel",
                    "firstSurname": "García",
                    "secondSurname": "Márquez",
                },
                "publicationTimestamp": -81820800000,
            }
        }
    )


class TitleCountResponse(CamelModel):
    """Sorted titles together with the number of books per author."""
    titles: List[str] = Field(..., description="All titles in ascending order")
    author_count: Dict[str, int] = Field(..., description="Books per author full name")


class FormattedDateResponse(CamelModel):
    """A book with its publication date rendered as yyyy-MM-dd."""
    book: Book
    formatted_date: Optional[str] = Field(None, description="ISO date or null")


class PagesMaxMinResponse(CamelModel):
    """Page statistics across the whole collection."""
    average: float = Field(..., description="Mean page count")
    most_pages: Optional[Book] = Field(None, description="Book with the most pages")
    least_pages: Optional[Book] = Field(None, description="Book with the least pages")


class ByAuthorResponse(CamelModel):
    """Books of one author and their estimated word count."""
    author_name: str
    books: List[Book]
    word_count: int = Field(..., description="Sum of pages times words per page")


class WithoutDateResponse(CamelModel):
    """Books lacking a publication date, plus a duplicate-author flag."""
    duplicated: bool = Field(..., description="Whether any author has more than one book")
    books: List[Book]


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books_loaded: int = Field(..., description="Number of books in the store")
