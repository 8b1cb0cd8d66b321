from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.translation import Language, TranslateIn, TranslateOut
from services.ai_services import GeminiGenerator, TextGenerator
from services.translation_services import SuggestionService, TranslationService

router = APIRouter(tags=["translate"])


def get_generator() -> TextGenerator:
    return GeminiGenerator()


@router.post("/translate", response_model=TranslateOut)
async def translate(
    data: TranslateIn,
    db: Session = Depends(get_db),
    generator: TextGenerator = Depends(get_generator),
):
    svc = TranslationService(db, generator)
    result = await svc.translate(
        data.text,
        data.source_language,
        data.target_language,
        force_regenerate=data.force_regenerate,
    )
    return TranslateOut(translation=result.translation, is_word=result.is_word, from_cache=result.from_cache)


@router.get("/suggestions", response_model=list[str])
async def word_suggestions(
    query: str = Query("", max_length=255),
    language: Language = Query("en"),
    db: Session = Depends(get_db),
):
    return SuggestionService(db).suggest(query, language)
