from __future__ import annotations

import logging

from petcare_api.domain.models import Click, ClickCreate
from petcare_api.repositories.base import AbstractClickRepository

logger = logging.getLogger(__name__)


class ClickService:
    def __init__(self, repository: AbstractClickRepository) -> None:
        self._repo = repository

    async def track(self, user_id: str, payload: ClickCreate) -> Click:
        click = Click(
            user_id=user_id,
            product_id=payload.product_id,
            product_title=payload.product_title,
            affiliate_link=payload.affiliate_link,
        )
        saved = await self._repo.save(click)
        logger.debug("Tracked affiliate click %s for product %s", saved.id, saved.product_id)
        return saved

    async def recent_clicks(self, user_id: str, limit: int = 50) -> list[Click]:
        return await self._repo.find_by_user(user_id, limit)
