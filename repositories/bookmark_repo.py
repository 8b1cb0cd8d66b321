from sqlalchemy.orm import Session
from sqlalchemy import delete, select

from core.database import upsert_insert
from models.bookmark import Bookmark


class BookmarkRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, *, user_id: int, word: str, language: str, translation: str) -> Bookmark | None:
        """Insert a bookmark; returns None when (user, word, language) is already bookmarked."""
        stmt = (
            upsert_insert(self.db, Bookmark)
            .values(user_id=user_id, word=word, language=language, translation=translation)
            .on_conflict_do_nothing(index_elements=["user_id", "word", "language"])
            .returning(Bookmark.id)
        )
        new_id = self.db.execute(stmt).scalar_one_or_none()
        self.db.commit()
        if new_id is None:
            return None
        return self.db.get(Bookmark, new_id)

    def delete(self, *, user_id: int, bookmark_id: int) -> bool:
        stmt = delete(Bookmark).where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
        result = self.db.execute(stmt)
        self.db.commit()
        return bool(result.rowcount)

    def search(self, *, user_id: int, query: str | None = None) -> list[Bookmark]:
        stmt = select(Bookmark).where(Bookmark.user_id == user_id)
        if query:
            stmt = stmt.where(Bookmark.word.icontains(query, autoescape=True))
        stmt = stmt.order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        return list(self.db.execute(stmt).scalars())
