import logging

from fastapi import APIRouter, Depends, status
from pydantic import field_validator

from coursehub.auth.dependencies import get_storage
from coursehub.core.errors import NotFoundError, UnexpectedError
from coursehub.core.validation import optional_text, parse_id
from coursehub.storage.base import Storage, StorageUnavailable
from coursehub.storage.records import (
    DEFAULT_PAYMENT_STATUS,
    CamelModel,
    CourseRegistrationRecord,
    NewCourseRegistration,
)

router = APIRouter(tags=['registrations'])

logger = logging.getLogger(__name__)


class CourseRegistrationRequest(CamelModel):
    user_id: int
    course_id: int
    payment_status: str | None = DEFAULT_PAYMENT_STATUS

    @field_validator('payment_status')
    @classmethod
    def validate_payment_status(cls, value: str | None) -> str:
        return optional_text(value) or DEFAULT_PAYMENT_STATUS


@router.post('/course-registrations', response_model=CourseRegistrationRecord, status_code=status.HTTP_201_CREATED)
def create_course_registration(data: CourseRegistrationRequest, storage: Storage = Depends(get_storage)):
    try:
        if storage.get_course(data.course_id) is None:
            raise NotFoundError('Course not found')

        if storage.get_user(data.user_id) is None:
            raise NotFoundError('User not found')

        # Repeat enrolments in the same course are accepted and stored as separate records.
        registration = storage.create_course_registration(
            NewCourseRegistration(
                user_id=data.user_id,
                course_id=data.course_id,
                payment_status=data.payment_status or DEFAULT_PAYMENT_STATUS,
            )
        )
    except StorageUnavailable as exc:
        raise UnexpectedError('Registration failed') from exc

    logger.info('User %s registered for course %s.', registration.user_id, registration.course_id)
    return registration


@router.get('/users/{user_id}/registrations', response_model=list[CourseRegistrationRecord])
def list_user_registrations(user_id: str, storage: Storage = Depends(get_storage)):
    parsed_id = parse_id(user_id)
    if parsed_id is None:
        return []

    try:
        return storage.get_user_registrations(parsed_id)
    except StorageUnavailable as exc:
        raise UnexpectedError('Failed to fetch user registrations') from exc
