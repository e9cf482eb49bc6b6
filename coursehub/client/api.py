"""HTTP client for the CourseHub REST API."""

import logging
from typing import Any

import httpx

from coursehub.storage.records import CourseRecord, CourseRegistrationRecord, PublicUser

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class AuthResult:
    def __init__(self, user: PublicUser, access_token: str | None):
        self.user = user
        self.access_token = access_token


class CourseHubClient:
    """Thin wrapper over ``httpx.Client``.

    Pass ``http`` to reuse an existing client (a FastAPI ``TestClient`` works,
    it is an ``httpx.Client``). Non-2xx responses raise ``ApiError``; no call
    is retried.
    """

    def __init__(self, base_url: str = 'http://localhost:8000', http: httpx.Client | None = None, timeout: float = 10.0):
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.access_token: str | None = None

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> 'CourseHubClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop('headers', {})
        if self.access_token:
            headers['Authorization'] = f'Bearer {self.access_token}'

        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning('%s %s failed: %s', method, path, exc)
            raise ApiError(0, 'Network error. Please try again.') from exc

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise ApiError(
                response.status_code,
                body.get('message') or response.reason_phrase,
                body.get('errors'),
            )
        return response.json()

    def _auth(self, path: str, payload: dict) -> AuthResult:
        body = self._request('POST', path, json=payload)
        self.access_token = body.get('accessToken')
        return AuthResult(PublicUser.model_validate(body['user']), self.access_token)

    def register(self, payload: dict) -> AuthResult:
        return self._auth('/api/auth/register', payload)

    def login(self, email: str, password: str) -> AuthResult:
        return self._auth('/api/auth/login', {'email': email, 'password': password})

    def me(self) -> PublicUser:
        return PublicUser.model_validate(self._request('GET', '/api/auth/me'))

    def list_courses(self, category: str | None = None) -> list[CourseRecord]:
        params = {'category': category} if category else None
        return [CourseRecord.model_validate(item) for item in self._request('GET', '/api/courses', params=params)]

    def get_course(self, course_id: int) -> CourseRecord:
        return CourseRecord.model_validate(self._request('GET', f'/api/courses/{course_id}'))

    def enroll(self, user_id: int, course_id: int, payment_status: str = 'completed') -> CourseRegistrationRecord:
        body = self._request(
            'POST',
            '/api/course-registrations',
            json={'userId': user_id, 'courseId': course_id, 'paymentStatus': payment_status},
        )
        return CourseRegistrationRecord.model_validate(body)

    def list_registrations(self, user_id: int) -> list[CourseRegistrationRecord]:
        body = self._request('GET', f'/api/users/{user_id}/registrations')
        return [CourseRegistrationRecord.model_validate(item) for item in body]

    def send_contact(self, payload: dict) -> str:
        return self._request('POST', '/api/contact', json=payload)['message']
