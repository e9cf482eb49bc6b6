import json
import logging
from pathlib import Path

from pydantic import ValidationError

from coursehub.client.api import ApiError, CourseHubClient
from coursehub.client.forms import LoginForm, RegisterForm, validate_form
from coursehub.storage.records import PublicUser

logger = logging.getLogger(__name__)


class SessionError(Exception):
    pass


class AuthSession:
    """Who is logged in, as far as the client knows.

    The user and access token returned by the API are kept in memory and,
    when ``store_path`` is given, in a JSON file that survives restarts.
    """

    def __init__(self, client: CourseHubClient, store_path: Path | str | None = None):
        self.client = client
        self.store_path = Path(store_path) if store_path else None
        self.user: PublicUser | None = None
        self.access_token: str | None = None
        self._restore()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _restore(self) -> None:
        if self.store_path is None or not self.store_path.exists():
            return
        try:
            stored = json.loads(self.store_path.read_text(encoding='utf-8'))
            self.user = PublicUser.model_validate(stored['user'])
        except (ValueError, KeyError, TypeError, ValidationError):
            logger.warning('Discarding unreadable session file %s.', self.store_path)
            self.store_path.unlink(missing_ok=True)
            return
        self.access_token = stored.get('accessToken')
        self.client.access_token = self.access_token

    def _persist(self) -> None:
        if self.store_path is None:
            return
        self.store_path.write_text(
            json.dumps({'user': self.user.model_dump(mode='json', by_alias=True), 'accessToken': self.access_token}),
            encoding='utf-8',
        )

    def _start(self, user: PublicUser, access_token: str | None) -> PublicUser:
        self.user = user
        self.access_token = access_token
        self._persist()
        return user

    def login(self, email: str, password: str) -> PublicUser:
        form = validate_form(LoginForm, {'email': email, 'password': password})
        try:
            result = self.client.login(form.email, form.password)
        except ApiError as exc:
            raise SessionError('Invalid email or password') from exc
        return self._start(result.user, result.access_token)

    def register(self, **fields) -> PublicUser:
        form = validate_form(RegisterForm, fields)
        try:
            result = self.client.register(form.to_payload())
        except ApiError as exc:
            raise SessionError(exc.message if exc.status_code == 400 else 'Registration failed') from exc
        return self._start(result.user, result.access_token)

    def logout(self) -> None:
        self.user = None
        self.access_token = None
        self.client.access_token = None
        if self.store_path is not None:
            self.store_path.unlink(missing_ok=True)
