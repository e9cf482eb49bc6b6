"""The storage contract the API talks to.

Lookups signal a miss with ``None``; storage never raises domain errors.
Backend failures surface as ``StorageUnavailable``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from coursehub.storage.records import (
    ALL_CATEGORIES,
    ContactMessageRecord,
    CourseCategory,
    CourseRecord,
    CourseRegistrationRecord,
    NewContactMessage,
    NewCourse,
    NewCourseRegistration,
    NewUser,
    UserRecord,
)


class StorageUnavailable(Exception):
    """The backend could not complete the operation."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_category_filter(category: str | None) -> CourseCategory | None:
    """Map a requested category to the one to filter on.

    ``None`` means no filtering: the category was absent, ``"all"`` or not
    one of the known labels.
    """
    if category is None or category.strip().lower() in {"", ALL_CATEGORIES}:
        return None
    return CourseCategory.parse(category)


class Storage(ABC):
    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> UserRecord | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> UserRecord | None: ...

    @abstractmethod
    def create_user(self, new_user: NewUser) -> UserRecord | None:
        """Store a user, or return ``None`` if the email is already taken."""

    # Courses
    @abstractmethod
    def get_all_courses(self) -> list[CourseRecord]: ...

    @abstractmethod
    def get_courses_by_category(self, category: str | None) -> list[CourseRecord]: ...

    @abstractmethod
    def get_course(self, course_id: int) -> CourseRecord | None: ...

    @abstractmethod
    def create_course(self, new_course: NewCourse) -> CourseRecord: ...

    # Registrations
    @abstractmethod
    def get_user_registrations(self, user_id: int) -> list[CourseRegistrationRecord]: ...

    @abstractmethod
    def create_course_registration(self, registration: NewCourseRegistration) -> CourseRegistrationRecord: ...

    # Contact messages
    @abstractmethod
    def create_contact_message(self, message: NewContactMessage) -> ContactMessageRecord: ...
