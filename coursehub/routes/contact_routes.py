import logging

from fastapi import APIRouter, Depends, status
from pydantic import EmailStr, field_validator

from coursehub.auth.dependencies import get_storage
from coursehub.core.errors import UnexpectedError
from coursehub.core.validation import normalize_email, optional_text, require_text
from coursehub.storage.base import Storage, StorageUnavailable
from coursehub.storage.records import CamelModel, NewContactMessage

router = APIRouter(tags=['contact'])

logger = logging.getLogger(__name__)

REQUIRED_FIELD_LABELS = {
    'first_name': 'First name',
    'last_name': 'Last name',
    'subject': 'Subject',
    'message': 'Message',
}


class ContactRequest(CamelModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: str | None = None
    subject: str
    message: str

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator('first_name', 'last_name', 'subject', 'message')
    @classmethod
    def validate_required_text(cls, value: str, info) -> str:
        return require_text(value, REQUIRED_FIELD_LABELS[info.field_name])

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        return optional_text(value)


class ContactAcknowledgement(CamelModel):
    message: str


@router.post('', response_model=ContactAcknowledgement, status_code=status.HTTP_201_CREATED)
def send_contact_message(data: ContactRequest, storage: Storage = Depends(get_storage)):
    try:
        record = storage.create_contact_message(NewContactMessage(**data.model_dump()))
    except StorageUnavailable as exc:
        raise UnexpectedError('Failed to send message') from exc

    logger.info('Stored contact message %s.', record.id)
    return ContactAcknowledgement(message='Message sent successfully')
