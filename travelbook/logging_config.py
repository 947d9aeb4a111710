from __future__ import annotations

import logging


def configure_app_logging(level: str = "INFO") -> None:
    """
    Minimal logging configuration for this repo.

    Notes:
    - stdlib logging only; Uvicorn already configures handlers.
    - Set `APP_LOG_LEVEL=DEBUG` (or INFO/WARNING/ERROR) to control verbosity.
    - MSAL and the Azure SDK log a lot at INFO; keep them at WARNING unless we debug.
    """

    normalized = level.upper()
    logging.getLogger("travelbook").setLevel(normalized)
    logging.getLogger("travelbook").propagate = True

    vendor_level = normalized if normalized == "DEBUG" else "WARNING"
    for name in ("msal", "azure"):
        logging.getLogger(name).setLevel(vendor_level)
