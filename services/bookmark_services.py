import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import InvalidInputError, UpstreamError
from models.bookmark import Bookmark
from repositories.bookmark_repo import BookmarkRepository
from services.ai_services import is_likely_word

logger = logging.getLogger(__name__)


class BookmarkService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BookmarkRepository(db)

    def add(self, *, user_id: int, word: str, language: str, translation: str) -> Bookmark:
        word = word.strip()
        if not is_likely_word(word):
            raise InvalidInputError("Only single words can be bookmarked")
        try:
            bookmark = self.repo.add(user_id=user_id, word=word, language=language, translation=translation)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Bookmark insert failed for user %s", user_id)
            raise UpstreamError("Failed to bookmark word") from exc
        if bookmark is None:
            raise InvalidInputError("Word already bookmarked")
        return bookmark

    def remove(self, *, user_id: int, bookmark_id: int) -> None:
        try:
            self.repo.delete(user_id=user_id, bookmark_id=bookmark_id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Bookmark delete failed for user %s", user_id)
            raise UpstreamError("Failed to remove bookmark") from exc

    def search(self, *, user_id: int, query: str | None = None) -> list[Bookmark]:
        return self.repo.search(user_id=user_id, query=(query or "").strip() or None)
