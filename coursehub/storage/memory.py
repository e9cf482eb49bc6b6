from itertools import count
from threading import Lock

from coursehub.storage.base import Storage, resolve_category_filter, utcnow
from coursehub.storage.records import (
    ContactMessageRecord,
    CourseRecord,
    CourseRegistrationRecord,
    NewContactMessage,
    NewCourse,
    NewCourseRegistration,
    NewUser,
    UserRecord,
)


class MemStorage(Storage):
    """Process-local storage: one dict per collection keyed by id."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: dict[int, UserRecord] = {}
        self._courses: dict[int, CourseRecord] = {}
        self._registrations: dict[int, CourseRegistrationRecord] = {}
        self._messages: dict[int, ContactMessageRecord] = {}
        self._user_ids = count(1)
        self._course_ids = count(1)
        self._registration_ids = count(1)
        self._message_ids = count(1)

    def get_user(self, user_id: int) -> UserRecord | None:
        return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        with self._lock:
            return self._find_user_by_email(email)

    def _find_user_by_email(self, email: str) -> UserRecord | None:
        return next((user for user in self._users.values() if user.email == email), None)

    def create_user(self, new_user: NewUser) -> UserRecord | None:
        with self._lock:
            if self._find_user_by_email(new_user.email) is not None:
                return None
            user = UserRecord(id=next(self._user_ids), created_at=utcnow(), **new_user.model_dump())
            self._users[user.id] = user
            return user

    def get_all_courses(self) -> list[CourseRecord]:
        with self._lock:
            return list(self._courses.values())

    def get_courses_by_category(self, category: str | None) -> list[CourseRecord]:
        wanted = resolve_category_filter(category)
        courses = self.get_all_courses()
        if wanted is None:
            return courses
        return [course for course in courses if course.category == wanted]

    def get_course(self, course_id: int) -> CourseRecord | None:
        return self._courses.get(course_id)

    def create_course(self, new_course: NewCourse) -> CourseRecord:
        with self._lock:
            course = CourseRecord(id=next(self._course_ids), created_at=utcnow(), **new_course.model_dump())
            self._courses[course.id] = course
            return course

    def get_user_registrations(self, user_id: int) -> list[CourseRegistrationRecord]:
        with self._lock:
            return [reg for reg in self._registrations.values() if reg.user_id == user_id]

    def create_course_registration(self, registration: NewCourseRegistration) -> CourseRegistrationRecord:
        with self._lock:
            record = CourseRegistrationRecord(
                id=next(self._registration_ids),
                registration_date=utcnow(),
                **registration.model_dump(),
            )
            self._registrations[record.id] = record
            return record

    def create_contact_message(self, message: NewContactMessage) -> ContactMessageRecord:
        with self._lock:
            record = ContactMessageRecord(id=next(self._message_ids), created_at=utcnow(), **message.model_dump())
            self._messages[record.id] = record
            return record
