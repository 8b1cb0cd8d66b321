from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select

from core.database import upsert_insert
from models.translationCache import TranslationCacheEntry


class TranslationCacheRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, cache_key: str) -> TranslationCacheEntry | None:
        stmt = select(TranslationCacheEntry).where(TranslationCacheEntry.cache_key == cache_key)
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert(
        self,
        *,
        cache_key: str,
        source_text: str,
        source_language: str,
        target_language: str,
        prompt_version: str,
        translation: str,
        is_word: bool,
    ) -> TranslationCacheEntry:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        stmt = upsert_insert(self.db, TranslationCacheEntry).values(
            cache_key=cache_key,
            source_text=source_text,
            source_language=source_language,
            target_language=target_language,
            prompt_version=prompt_version,
            translation=translation,
            is_word=is_word,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["cache_key"],
            set_={
                "translation": stmt.excluded.translation,
                "is_word": stmt.excluded.is_word,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        self.db.execute(stmt)
        self.db.commit()
        return self.get(cache_key)
