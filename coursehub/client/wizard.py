"""Course registration wizard.

Three steps collect data locally (personal info, payment info, confirmation)
and only the last one talks to the API, creating a single course
registration. ``reset()`` clears everything and goes back to the first step
from any state.
"""

import logging
from enum import Enum

from coursehub.client.api import ApiError, CourseHubClient
from coursehub.client.forms import (
    FormError,
    PaymentInfo,
    PersonalInfo,
    format_card_number,
    format_expiry_date,
    validate_form,
)
from coursehub.storage.records import CourseRecord, CourseRegistrationRecord, PublicUser

logger = logging.getLogger(__name__)

COMPLETED_PAYMENT_STATUS = 'completed'
TERMS_REQUIRED_MESSAGE = 'You must confirm your details and agree to the course terms.'
LOGIN_REQUIRED_MESSAGE = 'Please log in to register for a course.'
REGISTRATION_FAILED_MESSAGE = 'Registration failed. Please try again later.'


class WizardStep(Enum):
    PERSONAL_INFO = 1
    PAYMENT_INFO = 2
    CONFIRMATION = 3
    SUCCESS = 4


class WizardStateError(Exception):
    """An action was attempted from a step that does not allow it."""


class RegistrationWizard:
    def __init__(self, client: CourseHubClient, course: CourseRecord, user: PublicUser | None = None):
        self.client = client
        self.course = course
        self.user = user
        self.reset()

    def _personal_defaults(self) -> dict[str, str]:
        user = self.user
        return {
            'first_name': user.first_name if user else '',
            'last_name': user.last_name if user else '',
            'email': user.email if user else '',
            'phone': (user.phone or '') if user else '',
            'education': '',
        }

    def reset(self) -> None:
        self.step = WizardStep.PERSONAL_INFO
        self.personal_draft = self._personal_defaults()
        self.payment_draft = {'card_name': '', 'card_number': '', 'expiry_date': '', 'cvv': ''}
        self.personal: PersonalInfo | None = None
        self.payment: PaymentInfo | None = None
        self.agreed_to_terms = False
        self.errors: dict[str, str] = {}
        self.error: str | None = None
        self.registration: CourseRegistrationRecord | None = None

    def _require_step(self, step: WizardStep, action: str) -> None:
        if self.step is not step:
            raise WizardStateError(f'Cannot {action} from {self.step.name}.')

    @property
    def progress(self) -> tuple[int, int]:
        return min(self.step.value, 3), 3

    # Step 1
    def update_personal(self, **fields: str) -> None:
        self.personal_draft.update(fields)

    def submit_personal(self, **fields: str) -> bool:
        self._require_step(WizardStep.PERSONAL_INFO, 'submit personal information')
        self.update_personal(**fields)
        try:
            self.personal = validate_form(PersonalInfo, self.personal_draft)
        except FormError as exc:
            self.errors = exc.errors
            return False
        self.errors = {}
        self.step = WizardStep.PAYMENT_INFO
        return True

    # Step 2
    def update_payment(self, **fields: str) -> None:
        if 'card_number' in fields:
            fields['card_number'] = format_card_number(fields['card_number'])
        if 'expiry_date' in fields:
            fields['expiry_date'] = format_expiry_date(fields['expiry_date'])
        self.payment_draft.update(fields)

    def submit_payment(self, **fields: str) -> bool:
        self._require_step(WizardStep.PAYMENT_INFO, 'submit payment information')
        self.update_payment(**fields)
        try:
            self.payment = validate_form(PaymentInfo, self.payment_draft)
        except FormError as exc:
            self.errors = exc.errors
            return False
        self.errors = {}
        self.step = WizardStep.CONFIRMATION
        return True

    def back(self) -> None:
        if self.step is WizardStep.PAYMENT_INFO:
            self.step = WizardStep.PERSONAL_INFO
        elif self.step is WizardStep.CONFIRMATION:
            self.step = WizardStep.PAYMENT_INFO
        else:
            raise WizardStateError(f'Cannot go back from {self.step.name}.')
        self.errors = {}
        self.error = None

    # Step 3
    def set_agreement(self, agreed: bool) -> None:
        self.agreed_to_terms = agreed

    def summary(self) -> dict:
        personal = self.personal
        return {
            'student': f'{personal.first_name} {personal.last_name}' if personal else '',
            'email': personal.email if personal else '',
            'course': self.course.title,
            'duration': self.course.duration,
            'total': self.course.price,
        }

    def confirm(self) -> bool:
        """Create the registration. On failure stay on CONFIRMATION with ``error`` set."""
        self._require_step(WizardStep.CONFIRMATION, 'complete registration')

        if not self.agreed_to_terms:
            self.error = TERMS_REQUIRED_MESSAGE
            return False
        if self.user is None:
            self.error = LOGIN_REQUIRED_MESSAGE
            return False

        try:
            self.registration = self.client.enroll(
                user_id=self.user.id,
                course_id=self.course.id,
                payment_status=COMPLETED_PAYMENT_STATUS,
            )
        except ApiError as exc:
            logger.warning('Course registration failed with %s: %s', exc.status_code, exc.message)
            self.error = REGISTRATION_FAILED_MESSAGE
            return False

        self.error = None
        self.step = WizardStep.SUCCESS
        return True
