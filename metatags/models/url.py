from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from metatags.database import Base


class TrackedUrl(Base):
    __tablename__ = "metatags_urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    uri = Column(String, unique=True, index=True, nullable=False)
    autoupdate = Column(Boolean, default=True, nullable=False)
    published = Column(Boolean, default=True, nullable=False)
    checked_at = Column(DateTime, nullable=True)

    tags = relationship("MetaTag", back_populates="url", cascade="all, delete-orphan")
