import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('BCRYPT_ROUNDS', '4')
os.environ.setdefault('SEED_COURSES', 'true')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from coursehub.main import create_app  # noqa: E402
from coursehub.storage.memory import MemStorage  # noqa: E402
from coursehub.storage.seed import seed_courses  # noqa: E402


@pytest.fixture
def storage() -> MemStorage:
    store = MemStorage()
    seed_courses(store)
    return store


@pytest.fixture
def client(storage: MemStorage):
    with TestClient(create_app(storage=storage)) as test_client:
        yield test_client
