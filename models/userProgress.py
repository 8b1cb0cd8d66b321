from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from core.database import Base


class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "daily_set_id", name="uq_user_progress_user_set"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    daily_set_id = Column(Integer, ForeignKey("daily_word_sets.id", ondelete="CASCADE"), nullable=False, index=True)
    correct_answers = Column(JSON, nullable=False, default=list)
    incorrect_answers = Column(JSON, nullable=False, default=list)
    score = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)
