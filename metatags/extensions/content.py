"""
Reader for the CMS's own articles and categories.

Views:
    article   → published Article by ``id``
    category  → Category by ``id``
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from metatags.extensions.base import ContentReader, format_date, parse_item_id
from metatags.models.category import Category
from metatags.models.content import Article, ArticleStatus


class ContentArticleReader(ContentReader):
    @property
    def extension(self) -> str:
        return "content"

    async def load(self, options: dict[str, Any], db: AsyncSession) -> dict[str, Any]:
        item_id = parse_item_id(options.get("id"))
        if item_id is None:
            return {}

        view = options.get("view")
        if view == "article":
            return await self._load_article(item_id, db)
        if view == "category":
            return await self._load_category(item_id, db)
        return {}

    async def _load_article(self, item_id: int, db: AsyncSession) -> dict[str, Any]:
        result = await db.execute(
            select(Article).where(Article.id == item_id, Article.status == ArticleStatus.PUBLISHED)
        )
        article = result.scalars().first()
        if article is None:
            return {}

        return {
            "title": article.title,
            "metadesc": article.meta_description,
            "image": article.image,
            "image_alt": article.image_alt or article.title,
            "created": format_date(article.created_at),
            "modified": format_date(article.updated_at),
            "body": article.body,
        }

    async def _load_category(self, item_id: int, db: AsyncSession) -> dict[str, Any]:
        category = await db.get(Category, item_id)
        if category is None:
            return {}

        return {
            "title": category.title,
            "image": category.image,
            "created": format_date(category.created_at),
            "modified": format_date(category.updated_at),
            "body": category.description,
        }
