from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func
from core.database import Base


class TranslationCacheEntry(Base):
    __tablename__ = "translation_cache"

    id = Column(Integer, primary_key=True)
    # sha256 over (prompt_version, source_language, target_language, source_text)
    cache_key = Column(String(64), nullable=False, unique=True, index=True)
    source_text = Column(Text, nullable=False)
    source_language = Column(String(2), nullable=False)
    target_language = Column(String(2), nullable=False)
    prompt_version = Column(String(20), nullable=False)
    translation = Column(Text, nullable=False)
    is_word = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)
