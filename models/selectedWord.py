from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, func
from core.database import Base


class SelectedWord(Base):
    __tablename__ = "selected_words"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    word = Column(String(255), nullable=False, index=True)
    selected_date = Column(Date, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
