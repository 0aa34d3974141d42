"""
Tag Store

Loads and persists the tags of tracked URLs. Inserts go out as one batch;
changed tags are replaced by id (delete batch, then re-insert batch) so a
row keeps its id and ordering across a content refresh.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from metatags.exceptions import TagStoreError
from metatags.models.tag import MetaTag
from metatags.models.url import TrackedUrl
from metatags.schemas.tag import Tag, TagDelta, TagSet

logger = logging.getLogger(__name__)


class TagStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_url(self, uri: str) -> TrackedUrl | None:
        """Return the URL record registered for a clean URI."""
        result = await self.db.execute(
            select(TrackedUrl).where(TrackedUrl.uri == uri).execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def load_tags(self, url_id: int) -> TagSet:
        """Load every stored tag of a URL."""
        result = await self.db.execute(
            select(MetaTag)
            .where(MetaTag.url_id == url_id)
            .order_by(MetaTag.ordering, MetaTag.id)
            .execution_options(populate_existing=True)
        )
        return TagSet(url_id, (Tag.model_validate(row) for row in result.scalars().all()))

    async def store(self, delta: TagDelta) -> None:
        """
        Insert new tags and replace changed ones in one transaction.

        Args:
            delta: Output of the reconciler

        Raises:
            TagStoreError: If the database rejects a batch
        """
        if delta.is_empty:
            return

        url_id = (delta.to_insert or delta.to_update)[0].url_id
        try:
            if delta.to_insert:
                await self.db.execute(insert(MetaTag), delta.insert_rows())

            if delta.to_update:
                await self.db.execute(
                    delete(MetaTag)
                    .where(MetaTag.id.in_(delta.update_ids()))
                    .execution_options(synchronize_session=False)
                )
                await self.db.execute(insert(MetaTag), delta.replace_rows())

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to store tags for URL {url_id}: {e}")
            raise TagStoreError("store", url_id) from e

        logger.info(
            "Stored tags for URL %s: %d inserted, %d replaced",
            url_id,
            len(delta.to_insert),
            len(delta.to_update),
        )

    async def touch_check_date(self, url_id: int, checked_at: datetime | None = None) -> None:
        """Record when the URL was last checked for changes."""
        try:
            await self.db.execute(
                update(TrackedUrl)
                .where(TrackedUrl.id == url_id)
                .values(checked_at=checked_at or datetime.utcnow())
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise TagStoreError("touch_check_date", url_id) from e
