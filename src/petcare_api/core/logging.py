# src/petcare_api/core/logging.py
import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Konfiguriert das Root-Logging einmalig beim App-Start."""
    logging.basicConfig(level=level.upper(), format=_FORMAT)
    # httpx loggt jeden Request auf INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
