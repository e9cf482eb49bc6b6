import logging

from fastapi import APIRouter, Depends, status
from pydantic import EmailStr, field_validator

from coursehub.auth import jwt_handler
from coursehub.auth.dependencies import get_current_user, get_storage
from coursehub.auth.passwords import hash_password, verify_password
from coursehub.core.errors import AuthError, ConflictError, UnexpectedError
from coursehub.core.validation import normalize_email, optional_text, require_text
from coursehub.storage.base import Storage, StorageUnavailable
from coursehub.storage.records import CamelModel, NewUser, PublicUser, UserRecord

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = 'User already exists with this email'
INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: str
    phone: str | None = None
    education_level: str | None = None

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        # Length policy is a client-side concern; the server only needs something to hash.
        if not value:
            raise ValueError('Password is required.')
        return value

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return require_text(value, 'First name')

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, value: str) -> str:
        return require_text(value, 'Last name')

    @field_validator('phone', 'education_level')
    @classmethod
    def validate_optional_fields(cls, value: str | None) -> str | None:
        return optional_text(value)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required.')
        return value


class AuthResponse(CamelModel):
    user: PublicUser
    access_token: str
    token_type: str = 'bearer'


def build_auth_response(user: UserRecord) -> AuthResponse:
    return AuthResponse(
        user=user.to_public(),
        access_token=jwt_handler.create_access_token(user.id),
    )


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, storage: Storage = Depends(get_storage)):
    try:
        if storage.get_user_by_email(data.email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        user = storage.create_user(
            NewUser(
                email=data.email,
                password=hash_password(data.password),
                first_name=data.first_name,
                last_name=data.last_name,
                phone=data.phone,
                education_level=data.education_level,
            )
        )
    except StorageUnavailable as exc:
        raise UnexpectedError('Registration failed') from exc

    if user is None:
        # Another request registered the same email between the check and the insert.
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    logger.info('Registered user %s.', user.id)
    return build_auth_response(user)


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, storage: Storage = Depends(get_storage)):
    try:
        user = storage.get_user_by_email(data.email)
    except StorageUnavailable as exc:
        raise UnexpectedError('Login failed') from exc

    if user is None or not verify_password(data.password, user.password):
        raise AuthError(INVALID_CREDENTIALS_MESSAGE)

    logger.info('User %s logged in.', user.id)
    return build_auth_response(user)


@router.get('/me', response_model=PublicUser)
def me(current_user: UserRecord = Depends(get_current_user)):
    return current_user.to_public()
