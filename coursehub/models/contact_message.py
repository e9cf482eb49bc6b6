"""Contact message model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from coursehub.database import Base


class ContactMessage(Base):
    __tablename__ = "contact_messages"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String)
    subject = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True))
