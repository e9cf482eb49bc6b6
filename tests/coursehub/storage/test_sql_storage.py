from datetime import timezone

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coursehub.database import Base
from coursehub.models.contact_message import ContactMessage
from coursehub.models.course import Course
from coursehub.models.course_registration import CourseRegistration
from coursehub.models.user import User
from coursehub.storage.base import StorageUnavailable
from coursehub.storage.records import CourseCategory, NewContactMessage, NewCourseRegistration, NewUser
from coursehub.storage.seed import SAMPLE_COURSES, seed_courses
from coursehub.storage.sql import SqlStorage

TABLES = [User.__table__, Course.__table__, CourseRegistration.__table__, ContactMessage.__table__]


@pytest.fixture
def sql_storage():
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield SqlStorage(testing_session_local)
    finally:
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))
        engine.dispose()


def test_create_user_round_trips_through_the_database(sql_storage: SqlStorage) -> None:
    created = sql_storage.create_user(
        NewUser(email='alice@x.com', password='hashed', first_name='Alice', last_name='Smith', phone='555')
    )

    fetched = sql_storage.get_user_by_email('alice@x.com')

    assert created.id == 1
    assert fetched == sql_storage.get_user(created.id)
    assert fetched.phone == '555'
    assert fetched.education_level is None


def test_unique_email_constraint_is_reported_as_none(sql_storage: SqlStorage) -> None:
    new_user = NewUser(email='alice@x.com', password='hashed', first_name='Alice', last_name='Smith')
    sql_storage.create_user(new_user)

    assert sql_storage.create_user(new_user) is None

    second = sql_storage.create_user(new_user.model_copy(update={'email': 'bob@x.com'}))
    assert second is not None
    assert second.id > 1


def test_category_filter_matches_memory_semantics(sql_storage: SqlStorage) -> None:
    seed_courses(sql_storage)

    business = sql_storage.get_courses_by_category('Business')

    assert {course.category for course in business} == {CourseCategory.BUSINESS}
    assert len(business) == 2
    assert len(sql_storage.get_courses_by_category('all')) == len(SAMPLE_COURSES)
    assert len(sql_storage.get_courses_by_category(None)) == len(SAMPLE_COURSES)
    assert len(sql_storage.get_courses_by_category('unknown')) == len(SAMPLE_COURSES)


def test_course_lookup_miss_returns_none(sql_storage: SqlStorage) -> None:
    assert sql_storage.get_course(99) is None
    assert sql_storage.get_user(99) is None


def test_registrations_and_messages_are_persisted(sql_storage: SqlStorage) -> None:
    seed_courses(sql_storage)
    user = sql_storage.create_user(
        NewUser(email='alice@x.com', password='hashed', first_name='Alice', last_name='Smith')
    )

    registration = sql_storage.create_course_registration(NewCourseRegistration(user_id=user.id, course_id=1))
    message = sql_storage.create_contact_message(
        NewContactMessage(first_name='A', last_name='B', email='a@x.com', subject='Hi', message='Hello there!')
    )

    assert registration.payment_status == 'pending'
    assert registration.registration_date is not None
    assert sql_storage.get_user_registrations(user.id) == [registration]
    assert message.id == 1


def test_backend_failures_raise_storage_unavailable() -> None:
    engine = create_engine('sqlite:///:memory:', poolclass=StaticPool)
    storage = SqlStorage(sessionmaker(bind=engine))

    # No tables were created.
    with pytest.raises(StorageUnavailable) as exception_info:
        storage.get_all_courses()

    assert isinstance(exception_info.value.__cause__, OperationalError)


def test_timestamps_come_back_in_utc(sql_storage: SqlStorage) -> None:
    seed_courses(sql_storage)
    created = sql_storage.create_user(
        NewUser(email='alice@x.com', password='hashed', first_name='Alice', last_name='Smith')
    )
    sql_storage.create_course_registration(NewCourseRegistration(user_id=created.id, course_id=1))

    fetched = sql_storage.get_user(created.id)
    registration = sql_storage.get_user_registrations(created.id)[0]

    assert fetched.created_at.tzinfo is not None
    assert fetched.created_at.utcoffset() == timezone.utc.utcoffset(None)
    assert registration.registration_date.tzinfo is not None
    assert sql_storage.get_course(1).created_at.tzinfo is not None


def test_registrations_table_indexes_user_id() -> None:
    engine = create_engine('sqlite:///:memory:', poolclass=StaticPool)
    Base.metadata.create_all(bind=engine, tables=TABLES)

    indexed = [index['column_names'] for index in inspect(engine).get_indexes('course_registrations')]

    assert ['user_id'] in indexed
    engine.dispose()
