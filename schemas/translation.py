from typing import Literal

from pydantic import Field

from schemas.base import CamelModel

Language = Literal["en", "vi"]


class TranslateIn(CamelModel):
    text: str = Field(max_length=5000)
    source_language: Language
    target_language: Language
    force_regenerate: bool = False


class TranslateOut(CamelModel):
    translation: str
    is_word: bool
    from_cache: bool
