import datetime as dt

from sqlalchemy.orm import Session
from sqlalchemy import select

from core.database import upsert_insert
from models.dailyWordSet import DailyWordSet
from models.userProgress import UserProgress


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class DailySetRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_for_date(self, *, user_id: int, date: dt.date) -> DailyWordSet | None:
        stmt = select(DailyWordSet).where(
            DailyWordSet.user_id == user_id,
            DailyWordSet.date == date,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_excluding(self, *, user_id: int, exclude_date: dt.date | None = None) -> list[DailyWordSet]:
        stmt = select(DailyWordSet).where(DailyWordSet.user_id == user_id)
        if exclude_date is not None:
            stmt = stmt.where(DailyWordSet.date != exclude_date)
        stmt = stmt.order_by(DailyWordSet.date.desc())
        return list(self.db.execute(stmt).scalars())

    def upsert(self, *, user_id: int, date: dt.date, word_data: list[dict]) -> DailyWordSet:
        now = _utcnow()
        stmt = upsert_insert(self.db, DailyWordSet).values(
            user_id=user_id,
            date=date,
            word_data=word_data,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "date"],
            set_={
                "word_data": stmt.excluded.word_data,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        self.db.execute(stmt)
        self.db.commit()
        return self.get_for_date(user_id=user_id, date=date)


class ProgressRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_for_set(self, *, user_id: int, daily_set_id: int) -> UserProgress | None:
        stmt = select(UserProgress).where(
            UserProgress.user_id == user_id,
            UserProgress.daily_set_id == daily_set_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert(
        self,
        *,
        user_id: int,
        daily_set_id: int,
        correct_answers: list[int],
        incorrect_answers: list[int],
        score: int,
    ) -> UserProgress:
        now = _utcnow()
        stmt = upsert_insert(self.db, UserProgress).values(
            user_id=user_id,
            daily_set_id=daily_set_id,
            correct_answers=correct_answers,
            incorrect_answers=incorrect_answers,
            score=score,
            completed_at=now,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "daily_set_id"],
            set_={
                "correct_answers": stmt.excluded.correct_answers,
                "incorrect_answers": stmt.excluded.incorrect_answers,
                "score": stmt.excluded.score,
                "completed_at": stmt.excluded.completed_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        self.db.execute(stmt)
        self.db.commit()
        return self.get_for_set(user_id=user_id, daily_set_id=daily_set_id)
