import datetime as dt

from pydantic import Field, constr, model_validator

from schemas.base import CamelModel
from schemas.word import WordEntry

DAILY_SET_SIZE = 20


class DailySetIn(CamelModel):
    date: dt.date
    word_data: list[WordEntry] = Field(min_length=DAILY_SET_SIZE, max_length=DAILY_SET_SIZE)


class DailySetOut(CamelModel):
    id: int
    user_id: int
    date: dt.date
    word_data: list[WordEntry]
    created_at: dt.datetime
    updated_at: dt.datetime


class DailySetEnvelope(CamelModel):
    set: DailySetOut | None = None


class DailySetSaved(CamelModel):
    set: DailySetOut
    message: str


class HistoryWordsOut(CamelModel):
    history_words: list[WordEntry]


class ProgressIn(CamelModel):
    date: dt.date
    correct_answers: list[int] = Field(max_length=DAILY_SET_SIZE)
    incorrect_answers: list[int] = Field(max_length=DAILY_SET_SIZE)
    score: int = Field(ge=0, le=100)

    @model_validator(mode="after")
    def _disjoint_indices(self):
        indices = self.correct_answers + self.incorrect_answers
        if any(index < 0 for index in indices):
            raise ValueError("Answer indices must not be negative")
        if len(set(indices)) != len(indices):
            raise ValueError("Each word may be answered only once")
        return self


class ProgressOut(CamelModel):
    id: int
    user_id: int
    daily_set_id: int
    correct_answers: list[int]
    incorrect_answers: list[int]
    score: int
    completed_at: dt.datetime | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class ProgressEnvelope(CamelModel):
    progress: ProgressOut | None = None


class ProgressSaved(CamelModel):
    progress: ProgressOut
    message: str


class SelectedWordsBulkIn(CamelModel):
    words: list[constr(strip_whitespace=True, min_length=1, max_length=255)]
    selected_date: dt.date


class SelectedWordsSaved(CamelModel):
    message: str
    saved_count: int


class SelectedWordsOut(CamelModel):
    words: list[str]


class QuizQuestion(CamelModel):
    index: int
    entry: WordEntry
    options: list[str]


class QuizOut(CamelModel):
    mode: str
    date: dt.date | None = None
    questions: list[QuizQuestion]
    progress: ProgressOut | None = None


class QuizSubmitIn(CamelModel):
    date: dt.date
    answers: list[str | None] = Field(min_length=1, max_length=DAILY_SET_SIZE)


class HistoryQuizIn(CamelModel):
    words: list[WordEntry] = Field(min_length=1, max_length=100)
    answers: list[str | None]

    @model_validator(mode="after")
    def _same_length(self):
        if len(self.answers) != len(self.words):
            raise ValueError("Every word needs exactly one answer")
        return self


class GradeOut(CamelModel):
    correct_answers: list[int]
    incorrect_answers: list[int]
    score: int
