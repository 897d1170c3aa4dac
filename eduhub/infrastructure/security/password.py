"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated. bcrypt is
CPU-bound, so request handlers use the async wrappers, which run it in a
worker thread.
"""

import asyncio
import base64
import hashlib

import bcrypt

# Hash compared against when the user does not exist, so unknown emails and
# wrong passwords take the same time.
_dummy_hash_cache: str | None = None


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        return bool(bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


async def hash_password(password: str) -> str:
    return await asyncio.to_thread(get_password_hash, password)


async def check_password(plain_password: str, hashed_password: str | None) -> bool:
    """Async verify; a None hash is compared against a dummy hash and fails."""
    global _dummy_hash_cache
    if hashed_password is None:
        if _dummy_hash_cache is None:
            _dummy_hash_cache = await asyncio.to_thread(get_password_hash, "not-a-real-password")
        await asyncio.to_thread(verify_password, plain_password, _dummy_hash_cache)
        return False
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)
