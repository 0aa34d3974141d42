from .category import Category
from .content import Article, ArticleStatus
from .product import Product
from .tag import MetaTag
from .url import TrackedUrl

__all__ = [
    "Article",
    "ArticleStatus",
    "Category",
    "MetaTag",
    "Product",
    "TrackedUrl",
]
