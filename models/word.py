from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, func
from core.database import Base


class Word(Base):
    __tablename__ = "words"
    __table_args__ = (
        UniqueConstraint("word", "language", name="uq_words_word_language"),
    )

    id = Column(Integer, primary_key=True)
    word = Column(String(255), nullable=False, index=True)
    language = Column(String(2), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
