"""User model definitions."""

from sqlalchemy import Column, DateTime, Integer, String
from coursehub.database import Base


class User(Base):
    """Represents a registered student."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String)
    education_level = Column(String)
    created_at = Column(DateTime(timezone=True))
