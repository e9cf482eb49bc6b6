"""Records passed across the storage boundary.

Stored records are frozen; callers can hold on to them without affecting
what storage keeps. JSON field names are camelCase (``firstName``,
``paymentStatus``) while Python attributes stay snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

DEFAULT_PAYMENT_STATUS = "pending"
ALL_CATEGORIES = "all"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CourseCategory(str, Enum):
    TECHNOLOGY = "technology"
    BUSINESS = "business"
    DESIGN = "design"
    LANGUAGE = "language"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "CourseCategory | None":
        """Return the category for ``value`` or ``None`` when it is not one."""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Record(CamelModel):
    class Config:
        frozen = True


class NewUser(CamelModel):
    email: str
    password: str
    first_name: str
    last_name: str
    phone: str | None = None
    education_level: str | None = None


class PublicUser(Record):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    education_level: str | None = None
    created_at: UtcDatetime


class UserRecord(PublicUser):
    password: str

    def to_public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(exclude={"password"}))


class NewCourse(CamelModel):
    title: str
    description: str
    category: CourseCategory
    price: int
    original_price: int | None = None
    duration: str
    enrolled: int = 0
    image_url: str | None = None


class CourseRecord(Record):
    id: int
    title: str
    description: str
    category: CourseCategory
    price: int
    original_price: int | None = None
    duration: str
    enrolled: int = 0
    image_url: str | None = None
    created_at: UtcDatetime


class NewCourseRegistration(CamelModel):
    user_id: int
    course_id: int
    payment_status: str = DEFAULT_PAYMENT_STATUS


class CourseRegistrationRecord(Record):
    id: int
    user_id: int
    course_id: int
    payment_status: str = DEFAULT_PAYMENT_STATUS
    registration_date: UtcDatetime


class NewContactMessage(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    subject: str
    message: str


class ContactMessageRecord(Record):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    subject: str
    message: str
    created_at: UtcDatetime
