"""SQLModel table models.

These are the storage rows behind the SQL repositories; they are not
the domain entities. `repositories` converts between the two.
"""

from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class UserRow(SQLModel, table=True):
    """A registered user.

    Fields:
    - `email`: unique login identity (the unique index closes the
      check-then-insert race in registration)
    - `password_hash`: hashed password string (never store plaintext)
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, nullable=False, unique=True)
    password_hash: str


class QuizRow(SQLModel, table=True):
    """A stored quiz; `options` and `answer` are JSON lists."""
    __tablename__ = "quizzes"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    text: str
    options: List[str] = Field(sa_column=Column(JSON, nullable=False))
    answer: List[int] = Field(sa_column=Column(JSON, nullable=False))
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
