"""
Pytest configuration and fixtures for meta tags tests
"""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Settings require a database URL before the package is imported
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("LOG_JSON", "false")

from metatags.config import Settings  # noqa: E402
from metatags.context import RequestContext  # noqa: E402
from metatags.database import Base  # noqa: E402
from metatags.extensions.registry import ExtensionRegistry, register_builtin_readers  # noqa: E402
from metatags.models import Article, ArticleStatus, Category, Product, TrackedUrl  # noqa: E402

# Single shared connection so every session sees the same in-memory database
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

SITE_ROOT = "http://testserver/"


@pytest.fixture(scope="function")
async def setup_test_database():
    """Create every table before the test and drop them afterwards."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db(setup_test_database) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session on a fresh schema."""
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url=TEST_DATABASE_URL, site_root=SITE_ROOT, admin_path_prefix="/admin")


@pytest.fixture
def reader_registry() -> ExtensionRegistry:
    registry = ExtensionRegistry()
    register_builtin_readers(registry)
    return registry


@pytest.fixture
def mock_cache():
    """Stand-in for the Redis cache manager."""
    cache = AsyncMock()
    cache.invalidate_uri.return_value = True
    return cache


@pytest.fixture
async def test_category(test_db: AsyncSession) -> Category:
    category = Category(
        title="News",
        slug="news",
        description="<p>Latest <b>news</b> from the team.</p>",
        image="images/news.png",
    )
    test_db.add(category)
    await test_db.commit()
    await test_db.refresh(category)
    return category


@pytest.fixture
async def test_article(test_db: AsyncSession, test_category: Category) -> Article:
    article = Article(
        title="Hello World",
        slug="hello-world",
        body='<p>First paragraph of the article.</p><img src="images/hello.jpg" alt="Hello">',
        status=ArticleStatus.PUBLISHED,
        category_id=test_category.id,
        created_at=datetime(2026, 1, 10, 9, 30),
        updated_at=datetime(2026, 2, 1, 12, 0),
    )
    test_db.add(article)
    await test_db.commit()
    await test_db.refresh(article)
    return article


@pytest.fixture
async def test_product(test_db: AsyncSession) -> Product:
    product = Product(
        name="Blue Mug",
        short_description="A <em>blue</em> mug.",
        description="<p>Holds coffee.</p>",
        image="https://cdn.example.com/mug.png",
        published=True,
    )
    test_db.add(product)
    await test_db.commit()
    await test_db.refresh(product)
    return product


@pytest.fixture
async def article_url(test_db: AsyncSession, test_article: Article) -> TrackedUrl:
    url = TrackedUrl(uri=f"/articles/{test_article.id}", autoupdate=True, published=True)
    test_db.add(url)
    await test_db.commit()
    await test_db.refresh(url)
    return url


def make_context(**overrides) -> RequestContext:
    """RequestContext of a public GET page on the content extension."""
    values = {
        "url": "http://testserver/articles/1",
        "clean_uri": "/articles/1",
        "method": "GET",
        "document_type": "html",
        "is_admin": False,
        "extension": "content",
        "view": "article",
        "route_params": {"id": "1"},
        "site_root": SITE_ROOT,
    }
    values.update(overrides)
    return RequestContext(**values)
