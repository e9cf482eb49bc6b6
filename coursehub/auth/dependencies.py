from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from coursehub.auth import jwt_handler
from coursehub.core.errors import AuthError
from coursehub.storage.base import Storage
from coursehub.storage.records import UserRecord

security = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    storage: Storage = Depends(get_storage),
) -> UserRecord:
    if credentials is None:
        raise AuthError("Not authenticated")

    user = storage.get_user(jwt_handler.decode_access_token(credentials.credentials))
    if user is None:
        raise AuthError("User not found")
    return user
