from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from metatags.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, index=True, nullable=False)
    short_description = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    published = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
