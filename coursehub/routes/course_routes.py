from fastapi import APIRouter, Depends, Query

from coursehub.auth.dependencies import get_storage
from coursehub.core.errors import NotFoundError, UnexpectedError
from coursehub.core.validation import parse_id
from coursehub.storage.base import Storage, StorageUnavailable
from coursehub.storage.records import CourseRecord

router = APIRouter(tags=['courses'])


@router.get('', response_model=list[CourseRecord])
def list_courses(
    category: str | None = Query(default=None),
    storage: Storage = Depends(get_storage),
):
    try:
        return storage.get_courses_by_category(category)
    except StorageUnavailable as exc:
        raise UnexpectedError('Failed to fetch courses') from exc


@router.get('/{course_id}', response_model=CourseRecord)
def get_course(course_id: str, storage: Storage = Depends(get_storage)):
    parsed_id = parse_id(course_id)
    if parsed_id is None:
        raise NotFoundError('Course not found')

    try:
        course = storage.get_course(parsed_id)
    except StorageUnavailable as exc:
        raise UnexpectedError('Failed to fetch course') from exc

    if course is None:
        raise NotFoundError('Course not found')
    return course
