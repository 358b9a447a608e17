"""
FastAPI service answering read-only queries over a static book collection.

This package provides:
- A JSON-backed, immutable in-memory book store
- Query operations for filtering, grouping and page statistics
- A REST API exposing those queries under /api/books
"""
