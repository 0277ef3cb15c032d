"""Password hashing.

Passwords are hashed with passlib's `pbkdf2_sha256`, a salted adaptive
hash. The cost (rounds) is fixed here and a fresh salt is generated on
every call to `hash_password`. Verification goes through the same
context, which compares digests in constant time.

The plaintext is first reduced to its SHA-256 hex digest, so passwords
of any length fit under passlib's `MAX_PASSWORD_SIZE`.
"""

import hashlib

from passlib.context import CryptContext

PASSWORD_HASH_ROUNDS = 29000

PWD_CTX = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=PASSWORD_HASH_ROUNDS,
)


def _prehash(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def hash_password(password: str) -> str:
    return PWD_CTX.hash(_prehash(password))


def verify_password(password: str, hashed: str) -> bool:
    """Return True when `password` matches the stored `hashed` value."""
    return PWD_CTX.verify(_prehash(password), hashed)


def dummy_verify() -> bool:
    """Spend about as long as a real verification, then return False.

    Used when there is no stored hash to check against, so the caller's
    response time does not reveal whether the account exists.
    """
    PWD_CTX.dummy_verify()
    return False


def is_password_hash(value: str) -> bool:
    """Return True if `value` is a hash produced by this context."""
    return bool(value) and PWD_CTX.identify(value, required=False) is not None
