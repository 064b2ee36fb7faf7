from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from fastapi import FastAPI


def _validate_env() -> None:
    """
    Validate sync-related environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from txn_import.config import load_env_files

    load_env_files()

    errors: list[str] = []

    base_url = os.getenv("TXN_SYNC_BASE_URL", "").strip()
    if base_url:
        parsed = urlparse(base_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            errors.append(
                f"TXN_SYNC_BASE_URL='{base_url}' is not a valid http(s) URL."
            )

    if not os.getenv("TXN_SYNC_API_TOKEN", "").strip():
        errors.append(
            "TXN_SYNC_API_TOKEN is not set. The sync endpoint requires a bearer credential."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed, missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Transaction Import API",
        version="1.0.0",
    )

    from txn_import.api.routers import transaction_import_router

    application.include_router(transaction_import_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application
