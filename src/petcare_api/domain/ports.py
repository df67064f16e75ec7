# src/petcare_api/domain/ports.py
from abc import ABC, abstractmethod

from petcare_api.domain.models import ProviderResult


class ProductSearchPort(ABC):
    """
    Abstrakte Schnittstelle für externe Produktsuch-Provider.
    Der Orchestrator kennt ausschließlich dieses Interface.
    """

    @abstractmethod
    async def fetch_products(self, query: str) -> ProviderResult:
        """
        Sucht Produkte zu einem bereits normalisierten Suchbegriff.

        Provider-Fehler werden NICHT propagiert: Implementierungen liefern
        stattdessen ein ProviderResult mit origin=FALLBACK.
        """
        ...

    @property
    def dispatches_requests(self) -> bool:
        """False, wenn fetch_products garantiert keinen externen Request absetzt."""
        return True


# ---------------------------------------------------------------------------
# Custom Domain Exceptions
# ---------------------------------------------------------------------------


class ExternalApiError(Exception):
    def __init__(self, source: str, detail: str):
        super().__init__(f"External API error from '{source}': {detail}")
        self.source = source
        self.detail = detail
