from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from metatags.database import Base


class MetaTag(Base):
    __tablename__ = "metatags_tags"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(64), nullable=False)
    title = Column(String(255), nullable=False, default="")
    type = Column(String(32), nullable=False, default="")
    tag = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    output = Column(Text, nullable=False, default="")
    ordering = Column(Integer, nullable=False, default=0)
    url_id = Column(Integer, ForeignKey("metatags_urls.id", ondelete="CASCADE"), nullable=False)

    url = relationship("TrackedUrl", back_populates="tags")

    # One tag name per URL
    __table_args__ = (
        UniqueConstraint("url_id", "name", name="unique_url_tag_name"),
        Index("idx_metatags_tags_url", "url_id"),
    )
