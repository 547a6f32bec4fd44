# ─────────────────────────────────────────────────────────────────
# logs.py — Logging Setup
#
# One place configures the root logger for both servers.
# Every module then asks for its own named logger, e.g.
#
#   logger = logging.getLogger("routes")
#
# so each line says which part of the app wrote it.
# ─────────────────────────────────────────────────────────────────

import logging

LOG_FORMAT = "%(asctime)s — %(levelname)s — [%(name)s] — %(message)s"


def setup_logging(level: str = "INFO"):
    """
    Configures the root logger once per process.

    basicConfig is a no-op when handlers already exist (uvicorn or
    pytest may have installed some), so the level is applied
    explicitly as well.
    """

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
