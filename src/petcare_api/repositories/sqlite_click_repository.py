from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from petcare_api.domain.models import Click
from petcare_api.repositories.base import AbstractClickRepository


class Base(DeclarativeBase):
    pass


class ClickORM(Base):
    __tablename__ = "affiliate_clicks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    product_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # Kompletter Click als JSON, Spalten oben nur für Filter/Sortierung
    data: Mapped[str] = mapped_column(Text, nullable=False)


class SQLiteClickRepository(AbstractClickRepository):
    def __init__(self, database_url: str) -> None:
        self.engine = create_async_engine(database_url)
        self.async_session_maker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def initialize(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def save(self, click: Click) -> Click:
        async with self.async_session_maker() as session, session.begin():
            session.add(
                ClickORM(
                    id=click.id,
                    user_id=click.user_id,
                    product_id=click.product_id,
                    created_at=click.created_at,
                    data=click.model_dump_json(),
                )
            )
        return click

    async def find_by_user(self, user_id: str, limit: int = 50) -> list[Click]:
        async with self.async_session_maker() as session:
            result = await session.execute(
                select(ClickORM)
                .where(ClickORM.user_id == user_id)
                .order_by(ClickORM.created_at.desc())
                .limit(limit)
            )
            return [Click.model_validate_json(row.data) for row in result.scalars().all()]
