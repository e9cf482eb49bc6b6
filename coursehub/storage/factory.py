import logging

from sqlalchemy.exc import SQLAlchemyError

from coursehub.core import config
from coursehub.database import SessionLocal, engine
from coursehub.models import contact_message, course, course_registration, user
from coursehub.storage.base import Storage, StorageUnavailable
from coursehub.storage.memory import MemStorage
from coursehub.storage.seed import seed_courses
from coursehub.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def initialize_database() -> None:
    try:
        user.Base.metadata.create_all(bind=engine)
        course.Base.metadata.create_all(bind=engine)
        course_registration.Base.metadata.create_all(bind=engine)
        contact_message.Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
        raise StorageUnavailable('Database initialization failed.') from exc


def build_storage(backend: str | None = None, seed: bool | None = None) -> Storage:
    """Create the process-wide storage for the configured backend."""
    backend = (backend or config.STORAGE_BACKEND).strip().lower()
    seed = config.SEED_COURSES if seed is None else seed

    if backend == 'memory':
        storage: Storage = MemStorage()
    elif backend == 'sql':
        initialize_database()
        storage = SqlStorage(SessionLocal)
    else:
        raise ValueError(f'Unknown storage backend: {backend!r}')

    logger.info('Using %s storage backend.', backend)
    if seed:
        seed_courses(storage)
    return storage

