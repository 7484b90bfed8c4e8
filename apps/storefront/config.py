"""Runtime configuration read from the environment.

Values are resolved once at import time. Tests that need different settings
swap the content store through FastAPI's dependency overrides instead of
reloading this module.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_TRUTHY = ("1", "true", "True", "yes")

# Allow the frontend (local dev or deployed) to call the API.
_cors_origins = os.environ.get(
    "CORS_ALLOW_ORIGINS",
    "http://localhost:3000,http://127.0.0.1:3000",
)
CORS_ALLOW_ORIGINS = [o.strip() for o in _cors_origins.split(",") if o.strip()]

CATALOG_BACKEND = os.environ.get("CATALOG_BACKEND", "json").lower()
CATALOG_PATH = Path(
    os.environ.get(
        "CATALOG_PATH",
        str(Path(__file__).resolve().parents[2] / "data" / "catalog.json"),
    )
)

SANITY_PROJECT_ID = os.environ.get("SANITY_PROJECT_ID", "")
SANITY_DATASET = os.environ.get("SANITY_DATASET", "production")
SANITY_API_VERSION = os.environ.get("SANITY_API_VERSION", "2024-01-01")
SANITY_TOKEN = os.environ.get("SANITY_TOKEN") or None
SANITY_TIMEOUT = float(os.environ.get("SANITY_TIMEOUT", "10"))

# Hand the criteria to the content store as a compiled query instead of
# filtering the full list in memory.
PUSHDOWN_FILTERS = os.environ.get("STOREFRONT_PUSHDOWN_FILTERS") in _TRUTHY

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

_logging_configured = False


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger once per process."""
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _logging_configured = True
