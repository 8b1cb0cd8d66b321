from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from core.database import Base


class Bookmark(Base):
    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("user_id", "word", "language", name="uq_bookmarks_user_word_language"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    word = Column(String(255), nullable=False, index=True)
    language = Column(String(2), nullable=False)
    translation = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
