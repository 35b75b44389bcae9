"""
Village Backend — Password Hashing
====================================

What:  Salted password hashing and verification via passlib's CryptContext.
How:   pbkdf2_sha256 with a configurable round count. Hashing is CPU-bound,
       so the async wrappers push it onto Starlette's thread pool.
"""

import logging

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from village_api.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.password_hash_rounds,
)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Compare a plain password against a stored hash.

    A stored value passlib cannot identify (corrupt row, foreign hash format)
    counts as a mismatch.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        logger.warning("Stored password hash has an unrecognized format")
        return False


async def hash_password_async(plain: str) -> str:
    return await run_in_threadpool(hash_password, plain)


async def verify_password_async(plain: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password, plain, hashed)


async def dummy_verify_async() -> None:
    """Spend one verification's worth of time for an unknown username."""
    await run_in_threadpool(pwd_context.dummy_verify)
