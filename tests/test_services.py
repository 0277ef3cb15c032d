from quizapp.domain import AnswerResult
from quizapp.errors import (
    AnswerIndexOutOfBounds,
    AnsweredQuizDoesNotExist,
    Empty,
    IncorrectFields,
    InsertionError,
    InvalidEmail,
    RetrievalError,
    UserAlreadyExists,
)
from quizapp.repositories import QuizRepository, UserRepository
from quizapp.result import Err, Ok
from quizapp.services import QuizService, UserService
from quizapp.values import QuizId, UserId


class BrokenQuizRepository(QuizRepository):
    def __init__(self):
        self.inserted = []

    def create_new_quiz(self, quiz):
        self.inserted.append(quiz)
        return Err(InsertionError("OperationalError: disk I/O error"))

    def get_quiz(self, quiz_id):
        return Err(RetrievalError("OperationalError: database is locked"))


class BrokenUserRepository(UserRepository):
    def __init__(self):
        self.lookups = 0

    def create_user(self, user):
        return Err(InsertionError("OperationalError: disk I/O error"))

    def get_user_from_email(self, email):
        self.lookups += 1
        return Err(RetrievalError("OperationalError: database is locked"))


def test_save_and_get_quiz(quiz_service):
    res = quiz_service.save_quiz("Languages", "Which runs on the JVM?", [2], ["Rust", "TypeScript", "Kotlin"])
    assert res.ok
    quiz = quiz_service.get_quiz(res.value.value).value
    assert quiz.title.value == "Languages"
    assert quiz.answer_values() == [2]
    assert quiz.user_id is None


def test_save_quiz_reports_all_failures_in_field_order(quiz_service):
    res = quiz_service.save_quiz("", "", [5], ["Rust", ""])
    assert res == Err(IncorrectFields((
        Empty("title"),
        Empty("text"),
        AnswerIndexOutOfBounds(5, 1),
        Empty("option #1"),
    )))


def test_save_quiz_empty_title_and_bad_answer(quiz_service):
    res = quiz_service.save_quiz("", "Question?", [3], ["Rust", "Go"])
    assert res.error.failures == (Empty("title"), AnswerIndexOutOfBounds(3, 1))


def test_save_quiz_sets_owner_from_email(quiz_service, user_service):
    user_id = user_service.register_user("owner@b.com", "pw").value
    quiz_id = quiz_service.save_quiz("T", "Q", [0], ["a"], user_email="owner@b.com").value
    assert quiz_service.get_quiz(quiz_id).value.user_id == user_id


def test_save_quiz_tolerates_unknown_owner(quiz_service):
    quiz_id = quiz_service.save_quiz("T", "Q", [0], ["a"], user_email="ghost@b.com").value
    assert quiz_service.get_quiz(quiz_id).value.user_id is None


def test_save_quiz_propagates_repository_errors(user_repo):
    broken = BrokenQuizRepository()
    service = QuizService(broken, user_repo)
    assert service.save_quiz("T", "Q", [0], ["a"]) == Err(InsertionError("OperationalError: disk I/O error"))
    assert len(broken.inserted) == 1


def test_save_quiz_propagates_owner_lookup_errors(quiz_repo):
    service = QuizService(quiz_repo, BrokenUserRepository())
    res = service.save_quiz("T", "Q", [0], ["a"], user_email="a@b.com")
    assert isinstance(res.error, RetrievalError)


def test_answer_quiz_grades_as_sets(quiz_service):
    quiz_id = quiz_service.save_quiz("T", "Q", [0, 2], ["a", "b", "c"]).value
    assert quiz_service.answer_quiz(quiz_id, [2, 0]) == Ok(AnswerResult(True))
    assert quiz_service.answer_quiz(quiz_id, [0, 2, 2]) == Ok(AnswerResult(True))
    assert quiz_service.answer_quiz(quiz_id, [0]) == Ok(AnswerResult(False))


def test_answer_quiz_round_trip(quiz_service):
    quiz_id = quiz_service.save_quiz("Languages", "Pick one", [0], ["Rust", "Go"]).value
    assert quiz_service.answer_quiz(quiz_id.value, [0]).value.is_correct is True
    assert quiz_service.answer_quiz(quiz_id.value, [1]).value.is_correct is False


def test_answer_missing_quiz(quiz_service):
    assert quiz_service.answer_quiz(999, [0]) == Err(AnsweredQuizDoesNotExist(999))


def test_answer_quiz_propagates_retrieval_error(user_repo):
    service = QuizService(BrokenQuizRepository(), user_repo)
    assert isinstance(service.answer_quiz(QuizId(1), [0]).error, RetrievalError)
    assert isinstance(service.get_quiz(1).error, RetrievalError)


def test_register_user_twice(user_service):
    first = user_service.register_user("a@b.com", "pw")
    assert first.ok
    assert isinstance(first.value, UserId)
    assert user_service.register_user("a@b.com", "pw") == Err(UserAlreadyExists("a@b.com"))


def test_register_user_accumulates_failures(user_service):
    res = user_service.register_user("not-an-email", "")
    assert res == Err(IncorrectFields((InvalidEmail("not-an-email"), Empty("Password"))))


def test_register_user_propagates_lookup_errors():
    repo = BrokenUserRepository()
    res = UserService(repo).register_user("a@b.com", "pw")
    assert isinstance(res.error, RetrievalError)
    assert repo.lookups == 1


def test_is_valid_user(user_service):
    user_service.register_user("a@b.com", "pw")
    assert user_service.is_valid_user("a@b.com", "pw") == Ok(True)


def test_is_valid_user_hides_which_part_was_wrong(user_service):
    user_service.register_user("a@b.com", "pw")
    unknown = user_service.is_valid_user("nobody@b.com", "pw")
    wrong_password = user_service.is_valid_user("a@b.com", "nope")
    malformed = user_service.is_valid_user("garbage", "pw")
    assert unknown == wrong_password == malformed == Ok(False)


def test_is_valid_user_propagates_lookup_errors():
    res = UserService(BrokenUserRepository()).is_valid_user("a@b.com", "pw")
    assert isinstance(res.error, RetrievalError)


def test_very_long_password_registers_and_verifies(user_service):
    long_password = "x" * 5000
    assert user_service.register_user("long@b.com", long_password).ok
    assert user_service.is_valid_user("long@b.com", long_password) == Ok(True)
    assert user_service.is_valid_user("long@b.com", "x" * 4999) == Ok(False)


def test_very_long_password_against_other_account(user_service):
    user_service.register_user("a@b.com", "pw")
    assert user_service.is_valid_user("a@b.com", "x" * 5000) == Ok(False)
    assert user_service.is_valid_user("nobody@b.com", "x" * 5000) == Ok(False)


def test_services_log_events(quiz_service, caplog):
    with caplog.at_level("INFO", logger="quizapp.services"):
        quiz_service.save_quiz("T", "Q", [0], ["a"])
        quiz_service.save_quiz("", "Q", [0], ["a"])
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("quiz_saved ") for m in messages)
    assert any(m.startswith("quiz_rejected ") for m in messages)
