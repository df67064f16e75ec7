from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from petcare_api.domain.models import Click


class AbstractClickRepository(ABC):
    @abstractmethod
    async def save(self, click: Click) -> Click:
        """Saves a new affiliate click."""
        ...

    @abstractmethod
    async def find_by_user(self, user_id: str, limit: int = 50) -> list[Click]:
        """Returns the most recent clicks of a user, newest first."""
        ...
