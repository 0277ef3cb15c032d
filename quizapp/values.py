"""Validated value types.

Each type wraps a single immutable scalar. Untrusted input goes through
the type's `parse` factory, which returns `Ok(instance)` or
`Err(failure)`. Direct construction re-checks the invariant and raises
`ValueError` on bad content; it exists for trusted sources such as rows
read back from storage, so an invalid instance can never exist.
"""

import re
from dataclasses import dataclass
from typing import Sequence

from .errors import AnswerIndexOutOfBounds, Empty, InvalidEmail
from .result import Err, Ok
from .security import hash_password, is_password_hash, verify_password

UNSAVED_ID = -1
_ID_MIN = -(2 ** 63)
_ID_MAX = 2 ** 63 - 1

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$")


def _check_id(value, kind: str):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{kind} must be an integer, got {value!r}")
    if not _ID_MIN <= value <= _ID_MAX:
        raise ValueError(f"{kind} {value} does not fit in 64 bits")


def _check_text(value, kind: str):
    if not isinstance(value, str) or not value:
        raise ValueError(f"{kind} must be a non-empty string")


@dataclass(frozen=True)
class QuizId:
    value: int

    def __post_init__(self):
        _check_id(self.value, "QuizId")

    @classmethod
    def unsaved(cls) -> "QuizId":
        return cls(UNSAVED_ID)

    @property
    def is_persisted(self) -> bool:
        return self.value != UNSAVED_ID


@dataclass(frozen=True)
class UserId:
    value: int

    def __post_init__(self):
        _check_id(self.value, "UserId")

    @classmethod
    def unsaved(cls) -> "UserId":
        return cls(UNSAVED_ID)

    @property
    def is_persisted(self) -> bool:
        return self.value != UNSAVED_ID


@dataclass(frozen=True)
class Title:
    value: str

    def __post_init__(self):
        _check_text(self.value, "Title")

    @classmethod
    def parse(cls, value: str):
        if isinstance(value, str) and value:
            return Ok(cls(value))
        return Err(Empty("title"))


@dataclass(frozen=True)
class Text:
    value: str

    def __post_init__(self):
        _check_text(self.value, "Text")

    @classmethod
    def parse(cls, value: str):
        if isinstance(value, str) and value:
            return Ok(cls(value))
        return Err(Empty("text"))


@dataclass(frozen=True)
class Option:
    value: str

    def __post_init__(self):
        _check_text(self.value, "Option")

    @classmethod
    def parse(cls, value: str, position: int = 0):
        """Validate one option; `position` names it in the failure."""
        if isinstance(value, str) and value:
            return Ok(cls(value))
        return Err(Empty(f"option #{position}"))


@dataclass(frozen=True)
class AnswerIndex:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValueError(f"AnswerIndex must be a non-negative integer, got {self.value!r}")

    @classmethod
    def parse(cls, value: int, options: Sequence):
        """Validate `value` as an index into `options`.

        An empty `options` sequence rejects every index, reporting a
        max index of -1.
        """
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < len(options):
            return Ok(cls(value))
        return Err(AnswerIndexOutOfBounds(value, len(options) - 1))


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not EMAIL_PATTERN.fullmatch(self.value):
            raise ValueError(f"invalid email: {self.value!r}")

    @classmethod
    def parse(cls, value: str):
        if isinstance(value, str) and EMAIL_PATTERN.fullmatch(value):
            return Ok(cls(value))
        return Err(InvalidEmail(value))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HashedPassword:
    """Opaque wrapper for a password hash; never holds the plaintext."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not is_password_hash(self.value):
            raise ValueError("HashedPassword only accepts a password hash")

    @classmethod
    def parse(cls, password: str):
        """Hash a plaintext password with a fresh salt."""
        if isinstance(password, str) and password:
            return Ok(cls(hash_password(password)))
        return Err(Empty("Password"))

    def matches(self, password: str) -> bool:
        return verify_password(password, self.value)

    def __repr__(self) -> str:
        return "HashedPassword(<hidden>)"
