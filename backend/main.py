"""
Notice Aggregator - process entrypoint
"""

import os

import uvicorn

from app.core.config import settings
from app.main import app  # noqa: F401  (re-export for `uvicorn main:app`)


if __name__ == "__main__":
    # Get port from environment variable with fallback
    port_str = os.environ.get("PORT") or "3000"

    try:
        port = int(port_str)
    except ValueError:
        print(f"ERROR: Invalid PORT value '{port_str}'. Using default port 3000.")
        port = 3000

    print(f"Starting server on port {port}")
    print(f"Environment: {settings.ENVIRONMENT}")
    print(f"Sources config: {settings.NEWS_CONFIG_PATH}")

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
