#!/usr/bin/env python3
"""
Script to run the Books Service API server.
"""

import uvicorn

from books_service.config import config


def main():
    """Run the API server."""
    print("Starting Books Service API Server")
    print(f"Host: {config.host}")
    print(f"Port: {config.port}")
    print(f"Debug: {config.debug}")
    print(f"Books file: {config.books_file}")
    print("=" * 50)

    uvicorn.run(
        "books_service.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    main()
