import datetime as dt

from sqlalchemy.orm import Session
from sqlalchemy import func, insert, select

from models.selectedWord import SelectedWord


class SelectedWordRepository:
    def __init__(self, db: Session):
        self.db = db

    def add_many(self, *, user_id: int, words: list[str], selected_date: dt.date) -> int:
        if not words:
            return 0
        self.db.execute(
            insert(SelectedWord),
            [{"user_id": user_id, "word": word, "selected_date": selected_date} for word in words],
        )
        self.db.commit()
        return len(words)

    def words_for_user(self, user_id: int) -> set[str]:
        stmt = select(SelectedWord.word).where(SelectedWord.user_id == user_id).distinct()
        return set(self.db.execute(stmt).scalars())

    def sample_any(self, limit: int = 20) -> list[str]:
        # Not filtered by user.
        stmt = select(SelectedWord.word).order_by(func.random()).limit(limit)
        return list(self.db.execute(stmt).scalars())
