"""Error taxonomy shared by the API routes.

Every error is an ``HTTPException`` so routes can raise it directly; the
handlers registered in ``coursehub.main`` render the body as
``{"message": ...}`` (plus ``errors`` for validation failures).
"""

from fastapi import HTTPException, status


class CourseHubError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: list[dict] | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)
        self.errors = errors or []


class ValidationError(CourseHubError):
    """Malformed or missing fields."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class ConflictError(CourseHubError):
    """A unique value (the user email) is already taken."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class AuthError(CourseHubError):
    """Bad credentials. The message never says which field was wrong."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class NotFoundError(CourseHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnexpectedError(CourseHubError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
