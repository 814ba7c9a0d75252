#!/usr/bin/env python3
"""Run the API with uvicorn using HOST/PORT from settings."""

import uvicorn

from authflow.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "authflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
