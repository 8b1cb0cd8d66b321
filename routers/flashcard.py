import datetime as dt
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import NotFoundError
from schemas.auth import Principal
from schemas.flashcard import (
    DailySetEnvelope,
    DailySetIn,
    DailySetOut,
    DailySetSaved,
    GradeOut,
    HistoryQuizIn,
    HistoryWordsOut,
    ProgressEnvelope,
    ProgressIn,
    ProgressOut,
    ProgressSaved,
    QuizOut,
    QuizSubmitIn,
    SelectedWordsBulkIn,
    SelectedWordsOut,
    SelectedWordsSaved,
)
from schemas.word import CandidatesOut
from services.catalog_services import WordCatalog, get_catalog
from services.flashcard_service import FlashcardService, grade
from .auth import current_principal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flashcards", tags=["Flashcard"])


def _progress_out(progress) -> ProgressOut | None:
    return ProgressOut.model_validate(progress) if progress is not None else None


@router.get("/daily-set")
async def get_daily_set(
    date: dt.date | None = Query(None),
    exclude_date: dt.date | None = Query(None, alias="excludeDate"),
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    svc = FlashcardService(db)
    if date is None:
        words = svc.history_words(user_id=principal.id, exclude_date=exclude_date)
        return HistoryWordsOut(history_words=words)

    daily_set = svc.get_daily_set(user_id=principal.id, date=date)
    if daily_set is None:
        return DailySetEnvelope(set=None)
    return DailySetEnvelope(set=DailySetOut.model_validate(daily_set))


@router.post("/daily-set", response_model=DailySetSaved)
async def save_daily_set(
    data: DailySetIn,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    svc = FlashcardService(db)
    daily_set = svc.save_daily_set(user_id=principal.id, date=data.date, words=data.word_data)
    return DailySetSaved(set=DailySetOut.model_validate(daily_set), message="Word set saved successfully")


@router.get("/progress", response_model=ProgressEnvelope)
async def get_progress(
    date: dt.date = Query(...),
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    progress = FlashcardService(db).get_progress(user_id=principal.id, date=date)
    return ProgressEnvelope(progress=_progress_out(progress))


@router.post("/progress", response_model=ProgressSaved)
async def save_progress(
    data: ProgressIn,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    progress = FlashcardService(db).save_progress(
        user_id=principal.id,
        date=data.date,
        correct_answers=data.correct_answers,
        incorrect_answers=data.incorrect_answers,
        score=data.score,
    )
    return ProgressSaved(progress=_progress_out(progress), message="Progress saved successfully")


@router.post("/selected-words/bulk", response_model=SelectedWordsSaved)
async def save_selected_words(
    data: SelectedWordsBulkIn,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    saved = FlashcardService(db).save_selected_words(
        user_id=principal.id,
        words=data.words,
        selected_date=data.selected_date,
    )
    return SelectedWordsSaved(message=f"Successfully saved {saved} words to history", saved_count=saved)


@router.get("/selected-words", response_model=SelectedWordsOut)
async def sample_selected_words(db: Session = Depends(get_db)):
    # FIXME: not scoped to the caller and unauthenticated; kept until product decides.
    # The select page uses /candidates, which excludes only the caller's history.
    return SelectedWordsOut(words=FlashcardService(db).sample_selected_words())


@router.get("/candidates", response_model=CandidatesOut)
async def candidate_words(
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
    catalog: WordCatalog = Depends(get_catalog),
):
    seen = FlashcardService(db).selected_words_for(principal.id)
    return CandidatesOut(candidates=catalog.candidate_pool(exclude=seen))


@router.get("/quiz", response_model=QuizOut)
async def get_quiz(
    date: dt.date | None = Query(None),
    exclude_date: dt.date | None = Query(None, alias="excludeDate"),
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    svc = FlashcardService(db)
    if date is None:
        entries = svc.history_words(user_id=principal.id, exclude_date=exclude_date)
        return QuizOut(mode="history", questions=svc.build_quiz(entries))

    daily_set = svc.get_daily_set(user_id=principal.id, date=date)
    if daily_set is None:
        raise NotFoundError("Daily word set not found")
    progress = svc.get_progress(user_id=principal.id, date=date)
    return QuizOut(
        mode="daily",
        date=date,
        questions=svc.build_quiz(svc.entries_of(daily_set)),
        progress=_progress_out(progress),
    )


@router.post("/quiz/submit", response_model=ProgressSaved)
async def submit_quiz(
    data: QuizSubmitIn,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    progress = FlashcardService(db).submit_answers(user_id=principal.id, date=data.date, answers=data.answers)
    return ProgressSaved(progress=_progress_out(progress), message="Progress saved successfully")


@router.post("/quiz/history", response_model=GradeOut)
async def grade_history_quiz(
    data: HistoryQuizIn,
    principal: Principal = Depends(current_principal),
):
    result = grade(data.words, data.answers)
    return GradeOut(
        correct_answers=result.correct_answers,
        incorrect_answers=result.incorrect_answers,
        score=result.score,
    )
