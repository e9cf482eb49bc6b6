import pytest
from pydantic import ValidationError

from coursehub.storage.memory import MemStorage
from coursehub.storage.records import (
    CourseCategory,
    NewContactMessage,
    NewCourse,
    NewCourseRegistration,
    NewUser,
)
from coursehub.storage.seed import SAMPLE_COURSES, seed_courses


def _new_user(email: str = 'alice@x.com') -> NewUser:
    return NewUser(email=email, password='hashed', first_name='Alice', last_name='Smith')


def test_create_user_assigns_sequential_ids_and_timestamp() -> None:
    storage = MemStorage()

    first = storage.create_user(_new_user('a@x.com'))
    second = storage.create_user(_new_user('b@x.com'))

    assert first.id == 1
    assert second.id == 2
    assert first.created_at is not None
    assert first.phone is None


def test_ids_strictly_increase_for_each_entity() -> None:
    storage = MemStorage()
    issued = []

    for index in range(5):
        user = storage.create_user(_new_user(f'user{index}@x.com'))
        assert all(user.id > previous for previous in issued)
        issued.append(user.id)

    message = storage.create_contact_message(
        NewContactMessage(first_name='A', last_name='B', email='a@x.com', subject='Hi', message='Hello there!')
    )
    assert message.id == 1


def test_create_user_returns_none_for_taken_email() -> None:
    storage = MemStorage()
    storage.create_user(_new_user())

    assert storage.create_user(_new_user()) is None
    assert storage.get_user(2) is None


def test_lookup_misses_return_none() -> None:
    storage = MemStorage()

    assert storage.get_user(42) is None
    assert storage.get_user_by_email('nobody@x.com') is None
    assert storage.get_course(42) is None
    assert storage.get_user_registrations(42) == []


def test_records_are_immutable() -> None:
    storage = MemStorage()
    user = storage.create_user(_new_user())

    with pytest.raises(ValidationError):
        user.email = 'mallory@x.com'

    assert storage.get_user_by_email('alice@x.com').email == 'alice@x.com'


def test_get_courses_by_category_filters_known_labels() -> None:
    storage = MemStorage()
    seed_courses(storage)

    technology = storage.get_courses_by_category('technology')

    assert [course.title for course in technology] == ['Full Stack Web Development', 'Data Science & Analytics']
    assert all(course.category is CourseCategory.TECHNOLOGY for course in technology)


@pytest.mark.parametrize('category', ['all', None, '', 'cooking'])
def test_get_courses_by_category_passes_through_all_and_unknown(category) -> None:
    storage = MemStorage()
    seed_courses(storage)

    assert storage.get_courses_by_category(category) == storage.get_all_courses()
    assert len(storage.get_courses_by_category(category)) == len(SAMPLE_COURSES)


def test_seed_courses_only_fills_an_empty_store() -> None:
    storage = MemStorage()

    assert seed_courses(storage) == len(SAMPLE_COURSES)
    assert seed_courses(storage) == 0
    assert len(storage.get_all_courses()) == len(SAMPLE_COURSES)


def test_create_course_defaults_enrolled_to_zero() -> None:
    storage = MemStorage()

    course = storage.create_course(
        NewCourse(title='Intro', description='Basics', category='other', price=100, duration='1 week')
    )

    assert course.enrolled == 0
    assert course.category is CourseCategory.OTHER


def test_registrations_are_listed_per_user_and_duplicates_are_kept() -> None:
    storage = MemStorage()

    storage.create_course_registration(NewCourseRegistration(user_id=1, course_id=1))
    storage.create_course_registration(NewCourseRegistration(user_id=1, course_id=1, payment_status='completed'))
    storage.create_course_registration(NewCourseRegistration(user_id=2, course_id=3))

    registrations = storage.get_user_registrations(1)

    assert [reg.id for reg in registrations] == [1, 2]
    assert registrations[0].payment_status == 'pending'
    assert registrations[1].payment_status == 'completed'
