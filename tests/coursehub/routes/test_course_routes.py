import pytest
from fastapi import HTTPException

from coursehub.routes.course_routes import get_course, list_courses
from coursehub.storage.base import StorageUnavailable
from coursehub.storage.memory import MemStorage


def test_list_courses_filters_by_category(storage: MemStorage) -> None:
    courses = list_courses(category='design', storage=storage)

    assert [course.title for course in courses] == ['UX/UI Design Fundamentals']


def test_get_course_raises_not_found_for_unknown_id(storage: MemStorage) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_course(course_id='999', storage=storage)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Course not found'


def test_list_courses_maps_storage_failure_to_500() -> None:
    class BrokenStorage(MemStorage):
        def get_courses_by_category(self, category):
            raise StorageUnavailable('database is down')

    with pytest.raises(HTTPException) as exception_info:
        list_courses(category=None, storage=BrokenStorage())

    assert exception_info.value.status_code == 500
    assert exception_info.value.detail == 'Failed to fetch courses'


@pytest.mark.parametrize('query', ['', '?category=all', '?category=unknown'])
def test_courses_endpoint_returns_full_catalogue(client, query: str) -> None:
    response = client.get(f'/api/courses{query}')

    assert response.status_code == 200
    assert len(response.json()) == 6


def test_courses_endpoint_serializes_camel_case_fields(client) -> None:
    response = client.get('/api/courses?category=technology')

    courses = response.json()
    assert [course['id'] for course in courses] == [1, 4]
    assert courses[0]['originalPrice'] == 24950
    assert courses[0]['category'] == 'technology'
    assert 'createdAt' in courses[0]


def test_course_detail_endpoint(client) -> None:
    found = client.get('/api/courses/5')
    missing = client.get('/api/courses/50')

    assert found.status_code == 200
    assert found.json()['title'] == 'Business English Mastery'
    assert missing.status_code == 404
    assert missing.json() == {'message': 'Course not found'}


@pytest.mark.parametrize('course_id', ['abc', '1.5', '-1'])
def test_get_course_treats_non_numeric_id_as_missing(storage: MemStorage, course_id: str) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_course(course_id=course_id, storage=storage)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Course not found'


def test_course_detail_endpoint_non_numeric_id_returns_404(client) -> None:
    response = client.get('/api/courses/abc')

    assert response.status_code == 404
    assert response.json() == {'message': 'Course not found'}
