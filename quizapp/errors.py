"""Domain error taxonomy.

The service layer reports every expected failure with one of the
variants below; nothing else is returned as an error. The variant set is
closed: `DOMAIN_ERROR_TYPES` and `FIELD_FAILURE_TYPES` list every
concrete type, and `error_messages` refuses anything outside them so a
newly added variant cannot silently fall through a consumer.

Field failures describe a single bad input field. Domain errors are the
outcomes of a service call:

- `IncorrectFields`: one or more field failures, in field order
- `UserAlreadyExists`: registration with an email that is taken
- `AnsweredQuizDoesNotExist`: answering a quiz id that is not stored
- `InsertionError` / `RetrievalError`: normalized storage faults
"""

from dataclasses import dataclass
from typing import List, Tuple, Union


@dataclass(frozen=True)
class Empty:
    name: str

    @property
    def message(self) -> str:
        return f"{self.name} cannot be empty"


@dataclass(frozen=True)
class AnswerIndexOutOfBounds:
    index: int
    max_index: int

    @property
    def message(self) -> str:
        return f"Answer index is out of bounds, provided {self.index}, max {self.max_index}"


@dataclass(frozen=True)
class InvalidEmail:
    attempt: str

    @property
    def message(self) -> str:
        return f"Invalid email: {self.attempt}"


FieldValidationFailure = Union[Empty, AnswerIndexOutOfBounds, InvalidEmail]
FIELD_FAILURE_TYPES = (Empty, AnswerIndexOutOfBounds, InvalidEmail)


@dataclass(frozen=True)
class IncorrectFields:
    """Every failing field of one validation pass. Never empty."""
    failures: Tuple[FieldValidationFailure, ...]

    def __post_init__(self):
        if not self.failures:
            raise ValueError("IncorrectFields requires at least one failure")

    @property
    def message(self) -> str:
        joined = ", ".join(f.message for f in self.failures)
        return f"Issues with the following fields: {joined}"


@dataclass(frozen=True)
class UserAlreadyExists:
    email: str

    @property
    def message(self) -> str:
        return f"A user with the email {self.email} already exists"


@dataclass(frozen=True)
class AnsweredQuizDoesNotExist:
    id: int

    @property
    def message(self) -> str:
        return f"The quiz you have attempted to answer does not exist, ID: {self.id}"


class PersistenceError:
    """Marker base for normalized storage faults."""
    fault: str

    @property
    def message(self) -> str:
        return self.fault


@dataclass(frozen=True)
class InsertionError(PersistenceError):
    fault: str


@dataclass(frozen=True)
class RetrievalError(PersistenceError):
    fault: str


DomainError = Union[IncorrectFields, UserAlreadyExists, AnsweredQuizDoesNotExist, InsertionError, RetrievalError]
DOMAIN_ERROR_TYPES = (IncorrectFields, UserAlreadyExists, AnsweredQuizDoesNotExist, InsertionError, RetrievalError)


def describe_fault(exc: BaseException) -> str:
    """Return a one-line description of a storage exception."""
    text = str(exc).strip().splitlines()
    first = text[0] if text else ""
    return f"{type(exc).__name__}: {first}" if first else type(exc).__name__


def error_messages(error: DomainError) -> List[str]:
    """Flatten a domain error into user-facing messages.

    `IncorrectFields` yields one message per failing field; every other
    variant yields a single message. Raises `TypeError` for objects that
    are not part of the taxonomy.
    """
    if isinstance(error, IncorrectFields):
        return [f.message for f in error.failures]
    if isinstance(error, (UserAlreadyExists, AnsweredQuizDoesNotExist)):
        return [error.message]
    if isinstance(error, (InsertionError, RetrievalError)):
        return [error.message]
    raise TypeError(f"unhandled domain error variant: {type(error).__name__}")
