import hashlib

import bcrypt

from coursehub.core import config


def _prehash(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes; a hex digest keeps every character significant.
    return hashlib.sha256(password.encode("utf-8")).hexdigest().encode("ascii")


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_prehash(password), salt).decode("ascii")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), hashed_password.encode("ascii"))
    except ValueError:
        # Not a bcrypt hash.
        return False
