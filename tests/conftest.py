import pytest

from quizapp.database import create_db_and_tables, make_engine
from quizapp.repositories import SqlQuizRepository, SqlUserRepository
from quizapp.services import QuizService, UserService


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database with tables created."""
    eng = make_engine("sqlite://", echo=False)
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def quiz_repo(engine):
    return SqlQuizRepository(engine)


@pytest.fixture
def user_repo(engine):
    return SqlUserRepository(engine)


@pytest.fixture
def quiz_service(quiz_repo, user_repo):
    return QuizService(quiz_repo, user_repo)


@pytest.fixture
def user_service(user_repo):
    return UserService(user_repo)
