import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from coursehub.core import config
from coursehub.core.errors import CourseHubError
from coursehub.routes import auth_routes, contact_routes, course_routes, registration_routes
from coursehub.storage.base import Storage
from coursehub.storage.factory import build_storage

logger = logging.getLogger(__name__)

VALIDATION_MESSAGES = {
    '/api/auth/register': 'Invalid registration data',
    '/api/auth/login': 'Invalid login data',
    '/api/course-registrations': 'Invalid registration data',
    '/api/contact': 'Invalid message data',
}


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get('loc', ()) if part not in ('body', 'query', 'path')]
        message = error.get('msg', 'Invalid value')
        # Strip pydantic's "Value error, " prefix from messages raised in validators.
        errors.append({'field': '.'.join(location), 'message': message.removeprefix('Value error, ')})
    return errors


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            'message': VALIDATION_MESSAGES.get(request.url.path, 'Invalid request data'),
            'errors': _field_errors(exc),
        },
    )


async def handle_course_hub_error(request: Request, exc: CourseHubError) -> JSONResponse:
    content = {'message': exc.detail}
    if exc.errors:
        content['errors'] = exc.errors
    if exc.status_code >= 500:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.detail, exc_info=exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'message': exc.detail}, headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': 'Internal server error'},
    )


def create_app(storage: Storage | None = None) -> FastAPI:
    app = FastAPI(title='CourseHub API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(CourseHubError, handle_course_hub_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.state.storage = storage

    @app.on_event('startup')
    def initialize_storage() -> None:
        config.validate_runtime_config()
        if app.state.storage is None:
            app.state.storage = build_storage()

    @app.get('/')
    def root():
        return {'status': 'CourseHub API Running'}

    app.include_router(auth_routes.router, prefix='/api/auth')
    app.include_router(course_routes.router, prefix='/api/courses')
    app.include_router(registration_routes.router, prefix='/api')
    app.include_router(contact_routes.router, prefix='/api/contact')

    return app


app = create_app()


def run() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    uvicorn.run('coursehub.main:app', host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
