"""
Tests for environment-driven configuration.
"""

import pytest
from pydantic import ValidationError

from books_service.config import DEFAULT_BOOKS_FILE, BooksServiceConfig


def test_defaults():
    settings = BooksServiceConfig(_env_file=None)
    assert settings.get_books_file_path() == DEFAULT_BOOKS_FILE
    assert settings.words_per_page == 250
    assert settings.most_recent_limit == 3
    assert settings.timezone == "UTC"
    assert settings.get_log_file_path() is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("WORDS_PER_PAGE", "300")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("BOOKS_FILE", "/tmp/books.json")
    settings = BooksServiceConfig(_env_file=None)
    assert settings.words_per_page == 300
    assert settings.log_level == "DEBUG"
    assert str(settings.get_books_file_path()) == "/tmp/books.json"


@pytest.mark.parametrize("field,value", [
    ("log_level", "LOUD"),
    ("log_format", "xml"),
    ("words_per_page", 0),
    ("most_recent_limit", 0),
    ("timezone", "Mars/Olympus_Mons"),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        BooksServiceConfig(_env_file=None, **{field: value})


def test_accepts_named_timezone():
    settings = BooksServiceConfig(_env_file=None, timezone="Europe/Madrid")
    assert settings.timezone == "Europe/Madrid"
