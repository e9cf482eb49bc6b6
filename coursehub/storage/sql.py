import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from coursehub.models.contact_message import ContactMessage
from coursehub.models.course import Course
from coursehub.models.course_registration import CourseRegistration
from coursehub.models.user import User
from coursehub.storage.base import Storage, StorageUnavailable, resolve_category_filter, utcnow
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

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Relational storage backed by SQLAlchemy sessions."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Storage operation failed.')
            raise StorageUnavailable(str(exc)) from exc
        finally:
            db.close()

    def get_user(self, user_id: int) -> UserRecord | None:
        with self._session() as db:
            user = db.get(User, user_id)
            return UserRecord.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> UserRecord | None:
        with self._session() as db:
            user = db.query(User).filter(User.email == email).first()
            return UserRecord.model_validate(user) if user else None

    def create_user(self, new_user: NewUser) -> UserRecord | None:
        with self._session() as db:
            user = User(created_at=utcnow(), **new_user.model_dump())
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # The UNIQUE constraint on users.email lost a race.
                db.rollback()
                return None
            db.refresh(user)
            return UserRecord.model_validate(user)

    def get_all_courses(self) -> list[CourseRecord]:
        with self._session() as db:
            courses = db.query(Course).order_by(Course.id.asc()).all()
            return [CourseRecord.model_validate(course) for course in courses]

    def get_courses_by_category(self, category: str | None) -> list[CourseRecord]:
        wanted = resolve_category_filter(category)
        if wanted is None:
            return self.get_all_courses()

        with self._session() as db:
            courses = db.query(Course).filter(Course.category == wanted.value).order_by(Course.id.asc()).all()
            return [CourseRecord.model_validate(course) for course in courses]

    def get_course(self, course_id: int) -> CourseRecord | None:
        with self._session() as db:
            course = db.get(Course, course_id)
            return CourseRecord.model_validate(course) if course else None

    def create_course(self, new_course: NewCourse) -> CourseRecord:
        values = new_course.model_dump()
        values['category'] = new_course.category.value
        with self._session() as db:
            course = Course(created_at=utcnow(), **values)
            db.add(course)
            db.commit()
            db.refresh(course)
            return CourseRecord.model_validate(course)

    def get_user_registrations(self, user_id: int) -> list[CourseRegistrationRecord]:
        with self._session() as db:
            registrations = (
                db.query(CourseRegistration)
                .filter(CourseRegistration.user_id == user_id)
                .order_by(CourseRegistration.id.asc())
                .all()
            )
            return [CourseRegistrationRecord.model_validate(reg) for reg in registrations]

    def create_course_registration(self, registration: NewCourseRegistration) -> CourseRegistrationRecord:
        with self._session() as db:
            record = CourseRegistration(registration_date=utcnow(), **registration.model_dump())
            db.add(record)
            db.commit()
            db.refresh(record)
            return CourseRegistrationRecord.model_validate(record)

    def create_contact_message(self, message: NewContactMessage) -> ContactMessageRecord:
        with self._session() as db:
            record = ContactMessage(created_at=utcnow(), **message.model_dump())
            db.add(record)
            db.commit()
            db.refresh(record)
            return ContactMessageRecord.model_validate(record)
