from sqlalchemy.orm import Session
from sqlalchemy import select

from core.database import upsert_insert
from models.word import Word


class WordRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_prefix(self, *, query: str, language: str, limit: int = 10) -> list[str]:
        stmt = (
            select(Word.word)
            .where(Word.language == language, Word.word.istartswith(query, autoescape=True))
            .order_by(Word.word.asc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def find_containing(self, *, query: str, language: str, limit: int = 10) -> list[str]:
        stmt = (
            select(Word.word)
            .where(Word.language == language, Word.word.icontains(query, autoescape=True))
            .order_by(Word.word.asc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def add_many(self, *, words: list[str], language: str) -> int:
        """Insert words, skipping ones already present. Returns the number of new rows."""
        if not words:
            return 0
        stmt = (
            upsert_insert(self.db, Word)
            .values([{"word": word, "language": language} for word in words])
            .on_conflict_do_nothing(index_elements=["word", "language"])
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return max(result.rowcount or 0, 0)
