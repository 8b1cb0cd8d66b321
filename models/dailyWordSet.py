from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, UniqueConstraint, func

from core.database import Base


class DailyWordSet(Base):
    __tablename__ = "daily_word_sets"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_word_sets_user_date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    word_data = Column(JSON, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)
