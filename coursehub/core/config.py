import os

from dotenv import load_dotenv

load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

STORAGE_BACKENDS = ("memory", "sql")
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./coursehub.db")
SEED_COURSES = _get_bool(os.getenv("SEED_COURSES"), default=True)

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:5173"])

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if STORAGE_BACKEND not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {STORAGE_BACKEND!r}."
        )
