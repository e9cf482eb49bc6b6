"""Course model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from coursehub.database import Base


class Course(Base):
    """Represents a course offered in the catalogue."""
    __tablename__ = "courses"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)
    price = Column(Integer, nullable=False)
    original_price = Column(Integer)
    duration = Column(String, nullable=False)
    enrolled = Column(Integer, default=0)
    image_url = Column(String)
    created_at = Column(DateTime(timezone=True))
