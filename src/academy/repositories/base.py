"""Base repository with the data access every entity shares."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.academy.schemas.pagination import decode_cursor, encode_cursor


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Data access for one model.

    Repositories never commit. Services own the transaction.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Stage an entity for insert (no flush/commit)."""
        self.session.add(entity)

    async def paginate_newest_first(
        self,
        query: Any,  # SelectOfScalar - SQLModel query over self.model
        cursor: str | None,
        limit: int,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Run ``query`` as keyset pagination over ``(created_at, id)``, newest first.

        The id breaks ties between rows created in the same instant, so no
        row is skipped or repeated across pages. An unreadable cursor
        restarts from the first page.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        created_at = self.model.created_at  # type: ignore[attr-defined]
        id_column = self.model.id  # type: ignore[attr-defined]

        if cursor:
            try:
                after_created_at, after_id = decode_cursor(cursor)
            except ValueError:
                pass
            else:
                query = query.where(
                    or_(
                        created_at < after_created_at,
                        and_(created_at == after_created_at, id_column < after_id),
                    )
                )

        query = query.order_by(created_at.desc(), id_column.desc()).limit(limit + 1)
        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        items = items[:limit]
        next_cursor = None
        if has_more:
            last = items[-1]
            next_cursor = encode_cursor(last.created_at, last.id)  # type: ignore[attr-defined]

        return items, next_cursor, has_more
