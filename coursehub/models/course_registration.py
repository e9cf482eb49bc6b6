"""Course registration model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from coursehub.database import Base


class CourseRegistration(Base):
    """Represents a student's enrolment in a course."""
    __tablename__ = "course_registrations"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    course_id = Column(Integer, ForeignKey("courses.id"))
    payment_status = Column(String, default="pending")
    registration_date = Column(DateTime(timezone=True))
