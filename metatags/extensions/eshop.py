"""
Reader for shop products (view ``product``, item ``id``).
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from metatags.extensions.base import ContentReader, format_date, parse_item_id
from metatags.models.product import Product


class EshopProductReader(ContentReader):
    @property
    def extension(self) -> str:
        return "eshop"

    async def load(self, options: dict[str, Any], db: AsyncSession) -> dict[str, Any]:
        if options.get("view") != "product":
            return {}

        item_id = parse_item_id(options.get("id") or options.get("product_id"))
        if item_id is None:
            return {}

        result = await db.execute(select(Product).where(Product.id == item_id, Product.published.is_(True)))
        product = result.scalars().first()
        if product is None:
            return {}

        return {
            "title": product.name,
            "metadesc": product.short_description,
            "image": product.image,
            "image_alt": product.name,
            "created": format_date(product.created_at),
            "modified": format_date(product.updated_at),
            "body": product.description,
        }
