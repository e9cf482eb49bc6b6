import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from coursehub.routes.registration_routes import (
    CourseRegistrationRequest,
    create_course_registration,
    list_user_registrations,
)
from coursehub.storage.memory import MemStorage
from coursehub.storage.records import NewUser


@pytest.fixture
def user_id(storage: MemStorage) -> int:
    user = storage.create_user(NewUser(email='alice@x.com', password='hashed', first_name='Alice', last_name='Smith'))
    return user.id


def test_registration_request_defaults_payment_status() -> None:
    assert CourseRegistrationRequest(user_id=1, course_id=2).payment_status == 'pending'
    assert CourseRegistrationRequest(user_id=1, course_id=2, payment_status=' ').payment_status == 'pending'


def test_registration_request_requires_numeric_ids() -> None:
    with pytest.raises(ValidationError):
        CourseRegistrationRequest.model_validate({'userId': 'abc', 'courseId': 1})
    with pytest.raises(ValidationError):
        CourseRegistrationRequest.model_validate({'courseId': 1})


def test_create_course_registration_checks_course_then_user(storage: MemStorage, user_id: int) -> None:
    with pytest.raises(HTTPException) as unknown_course:
        create_course_registration(CourseRegistrationRequest(user_id=999, course_id=999), storage=storage)
    with pytest.raises(HTTPException) as unknown_user:
        create_course_registration(CourseRegistrationRequest(user_id=999, course_id=1), storage=storage)

    assert unknown_course.value.status_code == 404
    assert unknown_course.value.detail == 'Course not found'
    assert unknown_user.value.status_code == 404
    assert unknown_user.value.detail == 'User not found'
    assert list_user_registrations(user_id='999', storage=storage) == []


def test_create_course_registration_does_not_touch_enrolled_counter(storage: MemStorage, user_id: int) -> None:
    before = storage.get_course(1).enrolled

    registration = create_course_registration(
        CourseRegistrationRequest(user_id=user_id, course_id=1, payment_status='completed'),
        storage=storage,
    )

    assert registration.payment_status == 'completed'
    assert storage.get_course(1).enrolled == before


def test_registration_endpoint_statuses(client, user_id: int) -> None:
    created = client.post('/api/course-registrations', json={'userId': user_id, 'courseId': 2})
    unknown = client.post('/api/course-registrations', json={'userId': user_id, 'courseId': 200})
    invalid = client.post('/api/course-registrations', json={'userId': 'me', 'courseId': 2})

    assert created.status_code == 201
    assert created.json()['paymentStatus'] == 'pending'
    assert 'registrationDate' in created.json()
    assert unknown.status_code == 404
    assert invalid.status_code == 400
    assert invalid.json()['message'] == 'Invalid registration data'


def test_list_user_registrations_non_numeric_id_is_empty(client, storage: MemStorage) -> None:
    response = client.get('/api/users/abc/registrations')

    assert list_user_registrations(user_id='abc', storage=storage) == []
    assert response.status_code == 200
    assert response.json() == []


def test_register_login_enroll_and_list(client) -> None:
    registered = client.post(
        '/api/auth/register',
        json={'email': 'alice@x.com', 'password': 'supersecret', 'firstName': 'Alice', 'lastName': 'Smith'},
    )
    assert registered.status_code == 201

    logged_in = client.post('/api/auth/login', json={'email': 'alice@x.com', 'password': 'supersecret'})
    user = logged_in.json()['user']
    assert 'password' not in user

    enrolled = client.post(
        '/api/course-registrations',
        json={'userId': user['id'], 'courseId': 1, 'paymentStatus': 'completed'},
    )
    assert enrolled.status_code == 201

    registrations = client.get(f"/api/users/{user['id']}/registrations").json()
    assert len(registrations) == 1
    assert registrations[0]['courseId'] == 1
    assert registrations[0]['paymentStatus'] == 'completed'
