#!/usr/bin/env python3
"""
Script to run the Bookstore API server.
"""

import uvicorn

from core.config import settings


def main():
    """Run the API server."""
    uvicorn.run(
        "api.main:app",
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.debug,
        log_level=settings.app.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
