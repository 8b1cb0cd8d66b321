import datetime as dt
import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import InvalidInputError, NotFoundError, UpstreamError
from models.dailyWordSet import DailyWordSet
from models.userProgress import UserProgress
from repositories.flashcard_repo import DailySetRepository, ProgressRepository
from repositories.selected_word_repo import SelectedWordRepository
from schemas.word import WordEntry

logger = logging.getLogger(__name__)

CHOICES_PER_QUESTION = 4
HISTORY_SAMPLE_SIZE = 100
SELECTED_WORDS_SAMPLE_SIZE = 20
FILLER_OPTIONS = ("Tôi không biết", "Không chắc chắn", "Cần xem lại", "Để sau")


def compute_score(correct: int, total: int) -> int:
    """Percentage of correct answers, halves rounded up."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


def is_correct(entry: WordEntry, answer: str | None) -> bool:
    return answer is not None and answer == entry.primary_meaning


def build_choices(entries: list[WordEntry], index: int, rng: random.Random | None = None) -> list[str]:
    """Four shuffled options for ``entries[index]``: its first meaning plus distractors."""
    rng = rng or random.Random()
    correct = entries[index].primary_meaning

    distractors = list(dict.fromkeys(
        entry.primary_meaning
        for position, entry in enumerate(entries)
        if position != index and entry.primary_meaning and entry.primary_meaning != correct
    ))
    rng.shuffle(distractors)

    options = [correct] + distractors[: CHOICES_PER_QUESTION - 1]
    for filler in FILLER_OPTIONS:
        if len(options) >= CHOICES_PER_QUESTION:
            break
        if filler not in options:
            options.append(filler)

    rng.shuffle(options)
    return options


@dataclass(frozen=True)
class Grade:
    correct_answers: list[int]
    incorrect_answers: list[int]
    score: int


def grade(entries: list[WordEntry], answers: list[str | None]) -> Grade:
    correct_answers: list[int] = []
    incorrect_answers: list[int] = []
    for position, (entry, answer) in enumerate(zip(entries, answers)):
        if is_correct(entry, answer):
            correct_answers.append(position)
        else:
            incorrect_answers.append(position)
    return Grade(
        correct_answers=correct_answers,
        incorrect_answers=incorrect_answers,
        score=compute_score(len(correct_answers), len(entries)),
    )


def random_sample(items: list, limit: int, rng: random.Random | None = None) -> list:
    rng = rng or random.Random()
    return rng.sample(items, min(limit, len(items)))


@contextmanager
def _storage_errors(db: Session, message: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise UpstreamError(message) from exc


class FlashcardService:
    def __init__(self, db: Session, rng: random.Random | None = None):
        self.db = db
        self.rng = rng or random.Random()
        self.set_repo = DailySetRepository(db)
        self.progress_repo = ProgressRepository(db)
        self.selected_repo = SelectedWordRepository(db)

    @staticmethod
    def entries_of(daily_set: DailyWordSet) -> list[WordEntry]:
        return [WordEntry.model_validate(item) for item in daily_set.word_data or []]

    def get_daily_set(self, *, user_id: int, date: dt.date) -> DailyWordSet | None:
        with _storage_errors(self.db, "Failed to fetch daily word set"):
            return self.set_repo.get_for_date(user_id=user_id, date=date)

    def save_daily_set(self, *, user_id: int, date: dt.date, words: list[WordEntry]) -> DailyWordSet:
        word_data = [entry.model_dump(mode="json") for entry in words]
        with _storage_errors(self.db, "Failed to save daily word set"):
            daily_set = self.set_repo.upsert(user_id=user_id, date=date, word_data=word_data)
        logger.info("Saved daily set %s for user %s (%d words)", date, user_id, len(words))
        return daily_set

    def history_words(self, *, user_id: int, exclude_date: dt.date | None = None) -> list[WordEntry]:
        with _storage_errors(self.db, "Failed to fetch daily word set"):
            sets = self.set_repo.list_excluding(user_id=user_id, exclude_date=exclude_date)
        words = [entry for daily_set in sets for entry in self.entries_of(daily_set)]
        return random_sample(words, HISTORY_SAMPLE_SIZE, self.rng)

    def get_progress(self, *, user_id: int, date: dt.date) -> UserProgress | None:
        with _storage_errors(self.db, "Failed to fetch user progress"):
            daily_set = self.set_repo.get_for_date(user_id=user_id, date=date)
            if daily_set is None:
                return None
            return self.progress_repo.get_for_set(user_id=user_id, daily_set_id=daily_set.id)

    def save_progress(
        self,
        *,
        user_id: int,
        date: dt.date,
        correct_answers: list[int],
        incorrect_answers: list[int],
        score: int,
    ) -> UserProgress:
        daily_set = self.get_daily_set(user_id=user_id, date=date)
        if daily_set is None:
            raise NotFoundError("Daily word set not found")

        total = len(daily_set.word_data or [])
        if any(index >= total for index in correct_answers + incorrect_answers):
            raise InvalidInputError("Answer index out of range")

        with _storage_errors(self.db, "Failed to save user progress"):
            progress = self.progress_repo.upsert(
                user_id=user_id,
                daily_set_id=daily_set.id,
                correct_answers=correct_answers,
                incorrect_answers=incorrect_answers,
                score=score,
            )
        logger.info("Saved progress for user %s on %s: %s%%", user_id, date, score)
        return progress

    def build_quiz(self, entries: list[WordEntry]) -> list[dict]:
        return [
            {"index": index, "entry": entry, "options": build_choices(entries, index, self.rng)}
            for index, entry in enumerate(entries)
        ]

    def submit_answers(self, *, user_id: int, date: dt.date, answers: list[str | None]) -> UserProgress:
        daily_set = self.get_daily_set(user_id=user_id, date=date)
        if daily_set is None:
            raise NotFoundError("Daily word set not found")
        entries = self.entries_of(daily_set)
        if len(answers) != len(entries):
            raise InvalidInputError("Every word needs exactly one answer")

        result = grade(entries, answers)
        return self.save_progress(
            user_id=user_id,
            date=date,
            correct_answers=result.correct_answers,
            incorrect_answers=result.incorrect_answers,
            score=result.score,
        )

    def save_selected_words(self, *, user_id: int, words: list[str], selected_date: dt.date) -> int:
        with _storage_errors(self.db, "Failed to save selected words"):
            return self.selected_repo.add_many(user_id=user_id, words=words, selected_date=selected_date)

    def selected_words_for(self, user_id: int) -> set[str]:
        with _storage_errors(self.db, "Failed to fetch selected words"):
            return self.selected_repo.words_for_user(user_id)

    def sample_selected_words(self) -> list[str]:
        with _storage_errors(self.db, "Failed to fetch selected words"):
            return self.selected_repo.sample_any(SELECTED_WORDS_SAMPLE_SIZE)
