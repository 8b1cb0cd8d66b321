from datetime import datetime

from pydantic import constr

from schemas.base import CamelModel
from schemas.translation import Language


class BookmarkIn(CamelModel):
    word: constr(strip_whitespace=True, min_length=1, max_length=255)
    language: Language
    translation: constr(min_length=1)


class BookmarkOut(CamelModel):
    id: int
    user_id: int
    word: str
    language: Language
    translation: str
    created_at: datetime
