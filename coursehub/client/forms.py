"""Client-side form schemas.

These run before anything is sent to the API, so they carry the rules the
server leaves to the client (password length, message length, consent
boxes) on top of the server's own.
"""

import re

from pydantic import EmailStr, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_snake

from coursehub.core.validation import normalize_email, optional_text
from coursehub.storage.records import CamelModel

MIN_PASSWORD_LENGTH = 8
MIN_CONTACT_MESSAGE_LENGTH = 10

CARD_NUMBER_PATTERN = re.compile(r'^\d{4} \d{4} \d{4} \d{4}$')
EXPIRY_PATTERN = re.compile(r'^(0[1-9]|1[0-2])/\d{2}$')
CVV_PATTERN = re.compile(r'^\d{3,4}$')


class FormError(Exception):
    """Local validation failed; ``errors`` maps field name to message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__('; '.join(f'{field}: {message}' for field, message in errors.items()))
        self.errors = errors


def form_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = to_snake(str(error['loc'][0])) if error['loc'] else '__all__'
        errors.setdefault(field, error['msg'].removeprefix('Value error, '))
    return errors


def validate_form(form_class, data: dict):
    try:
        return form_class.model_validate(data)
    except ValidationError as exc:
        raise FormError(form_errors(exc)) from exc


def format_card_number(value: str) -> str:
    """Group digits in fours: ``"4242424242424242"`` -> ``"4242 4242 4242 4242"``."""
    digits = re.sub(r'\s', '', value)
    return ' '.join(digits[i:i + 4] for i in range(0, len(digits), 4))


def format_expiry_date(value: str) -> str:
    digits = re.sub(r'\D', '', value)
    if len(digits) >= 2:
        return f'{digits[:2]}/{digits[2:4]}'
    return digits


def _required(value: str, message: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(message)
    return normalized


class LoginForm(CamelModel):
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
            raise ValueError('Password is required')
        return value


class RegisterForm(CamelModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: str | None = None
    password: str
    confirm_password: str
    education_level: str | None = None
    terms: bool = False

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return _required(value, 'First name is required')

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, value: str) -> str:
        return _required(value, 'Last name is required')

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator('phone', 'education_level')
    @classmethod
    def validate_optional_fields(cls, value: str | None) -> str | None:
        return optional_text(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        return value

    @field_validator('confirm_password')
    @classmethod
    def validate_confirm_password(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            raise ValueError('Confirm password is required')
        if 'password' in info.data and value != info.data['password']:
            raise ValueError("Passwords don't match")
        return value

    @field_validator('terms')
    @classmethod
    def validate_terms(cls, value: bool) -> bool:
        if not value:
            raise ValueError('You must agree to the terms and conditions')
        return value

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude={'confirm_password', 'terms'}, exclude_none=True)


class ContactForm(CamelModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: str | None = None
    subject: str
    message: str
    privacy: bool = False

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return _required(value, 'First name is required')

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, value: str) -> str:
        return _required(value, 'Last name is required')

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        return optional_text(value)

    @field_validator('subject')
    @classmethod
    def validate_subject(cls, value: str) -> str:
        return _required(value, 'Subject is required')

    @field_validator('message')
    @classmethod
    def validate_message(cls, value: str) -> str:
        normalized = value.strip()
        if len(normalized) < MIN_CONTACT_MESSAGE_LENGTH:
            raise ValueError(f'Message must be at least {MIN_CONTACT_MESSAGE_LENGTH} characters long')
        return normalized

    @field_validator('privacy')
    @classmethod
    def validate_privacy(cls, value: bool) -> bool:
        if not value:
            raise ValueError('You must agree to the privacy policy')
        return value

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude={'privacy'}, exclude_none=True)


class PersonalInfo(CamelModel):
    """Step 1 of the course registration wizard."""
    first_name: str
    last_name: str
    email: EmailStr
    phone: str
    education: str

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return _required(value, 'First name is required')

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, value: str) -> str:
        return _required(value, 'Last name is required')

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value: str) -> str:
        return _required(value, 'Phone number is required')

    @field_validator('education')
    @classmethod
    def validate_education(cls, value: str) -> str:
        return _required(value, 'Education level is required')


class PaymentInfo(CamelModel):
    """Step 2 of the wizard. Format checks only; card data is never sent."""
    card_name: str
    card_number: str
    expiry_date: str
    cvv: str

    @field_validator('card_name')
    @classmethod
    def validate_card_name(cls, value: str) -> str:
        return _required(value, 'Cardholder name is required')

    @field_validator('card_number')
    @classmethod
    def validate_card_number(cls, value: str) -> str:
        formatted = format_card_number(value)
        if not CARD_NUMBER_PATTERN.match(formatted):
            raise ValueError('Card number must be 16 digits')
        return formatted

    @field_validator('expiry_date')
    @classmethod
    def validate_expiry_date(cls, value: str) -> str:
        formatted = format_expiry_date(value)
        if not EXPIRY_PATTERN.match(formatted):
            raise ValueError('Expiry date is required')
        return formatted

    @field_validator('cvv')
    @classmethod
    def validate_cvv(cls, value: str) -> str:
        normalized = value.strip()
        if not CVV_PATTERN.match(normalized):
            raise ValueError('CVV is required')
        return normalized
