import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from metatags.database import Base


class ArticleStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    body = Column(Text, nullable=False, default="")
    status = Column(Enum(ArticleStatus), default=ArticleStatus.DRAFT, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    category = relationship("Category", back_populates="articles")

    # Metadata fields
    meta_description = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    image_alt = Column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint("slug", name="unique_article_slug"),
        Index("idx_article_status", "status"),
    )
