"""
FastAPI main application for the Books Service API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from books_service import store
from books_service.config import config
from books_service.logger import setup_logging
from books_service.models import (
    Book, ByAuthorResponse, ErrorResponse, FormattedDateResponse, HealthResponse,
    PagesMaxMinResponse, TitleCountResponse, WithoutDateResponse
)
from books_service.service import BookQueryService

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
    )
    logger.info("Starting Books Service API")

    book_store = store.load(config.get_books_file_path())
    app.state.book_service = BookQueryService(
        book_store,
        words_per_page=config.words_per_page,
        most_recent_limit=config.most_recent_limit,
        timezone_name=config.timezone,
    )

    yield

    logger.info("Shutting down Books Service API")


def get_book_service(request: Request) -> BookQueryService:
    """Query service built at startup."""
    return request.app.state.book_service


app = FastAPI(
    title=config.api_title,
    description=config.api_description,
    version=config.api_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.detail,
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


def not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(service: BookQueryService = Depends(get_book_service)):
    """Health check endpoint."""
    books_loaded = len(service.store)
    return HealthResponse(
        status="healthy" if books_loaded else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=config.api_version,
        books_loaded=books_loaded,
    )


router = APIRouter(prefix="/api/books", tags=["Books"])


@router.get("/filter", response_model=List[Book])
async def filter_books(
    min_pages: int = Query(..., alias="minPages", description="Exclusive lower bound on pages"),
    keyword: str = Query(..., description="Case-sensitive text the title must contain"),
    service: BookQueryService = Depends(get_book_service),
):
    """Books with more than ``minPages`` pages whose title contains ``keyword``."""
    logger.info("Request to filter books", min_pages=min_pages, keyword=keyword)
    result = service.filter_books(min_pages, keyword)
    if not result:
        logger.warning("No books found matching filter criteria", min_pages=min_pages, keyword=keyword)
        raise not_found("No books found matching the filter criteria.")
    return result


@router.get("/author", response_model=List[Book])
async def get_books_by_author(
    author_name: str = Query(..., alias="authorName", description="Author name and first surname"),
    service: BookQueryService = Depends(get_book_service),
):
    """Books by an author, matched case-insensitively on the full name."""
    logger.info("Request to get books by author", author=author_name)
    result = service.get_books_by_author(author_name)
    if not result:
        logger.warning("No books found for author", author=author_name)
        raise not_found(f"No books found for author: {author_name}")
    return result


@router.get("/sorted-count", response_model=TitleCountResponse)
async def get_sorted_count(service: BookQueryService = Depends(get_book_service)):
    """Titles in alphabetical order and the number of books per author."""
    logger.info("Request to get sorted titles and books count by author")
    response = service.get_book_title_count_response()
    if not response.titles:
        logger.warning("No books available for sorting/count")
        raise not_found("No books available.")
    return response


@router.get("/formatted-dates", response_model=List[FormattedDateResponse])
async def get_formatted_dates(service: BookQueryService = Depends(get_book_service)):
    """Every book with its publication date as yyyy-MM-dd."""
    logger.info("Request to get books with formatted dates")
    result = service.get_formatted_date()
    if not result:
        logger.warning("No books with formatted dates found")
        raise not_found("No books with formatted dates found.")
    return result


@router.get("/average-max-min", response_model=PagesMaxMinResponse)
async def get_average_max_min(service: BookQueryService = Depends(get_book_service)):
    """Average page count and the longest and shortest books."""
    logger.info("Request to get average, max and min pages of books")
    return service.get_book_pages_max_min_response()


@router.get("/author-wordcount", response_model=List[ByAuthorResponse])
async def get_author_word_count(service: BookQueryService = Depends(get_book_service)):
    """Books grouped by author with an estimated word count."""
    logger.info("Request to get books by author with word count")
    result = service.get_book_by_author_response()
    if not result:
        logger.warning("No books found")
        raise not_found("No books found.")
    return result


@router.get("/without-date", response_model=WithoutDateResponse)
async def get_books_without_date(service: BookQueryService = Depends(get_book_service)):
    """Books without publication date and whether any author is repeated."""
    logger.info("Request to get books without publication date")
    return service.get_book_without_date_response()


@router.get("/most-recent", response_model=List[Book])
async def get_most_recent_books(service: BookQueryService = Depends(get_book_service)):
    """The most recently published books, newest first."""
    logger.info("Request to get most recent books")
    result = service.get_top_most_recent_books()
    if not result:
        logger.warning("No recent books found")
        raise not_found("No recent books found.")
    return result


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "books_service.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
