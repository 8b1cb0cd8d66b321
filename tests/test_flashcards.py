"""Tests for the flashcard state machine: daily sets, progress, quiz grading, selected words."""

import datetime as dt
import random

import pytest
from httpx import AsyncClient

from core.errors import InvalidInputError, NotFoundError
from models.user import User
from schemas.flashcard import DAILY_SET_SIZE
from schemas.word import WordEntry
from services.flashcard_service import (
    CHOICES_PER_QUESTION,
    FILLER_OPTIONS,
    FlashcardService,
    build_choices,
    compute_score,
    grade,
)
from tests.conftest import make_entry, signup

TODAY = dt.date(2026, 10, 18)
YESTERDAY = TODAY - dt.timedelta(days=1)


def _entries(count: int, prefix: str = "word") -> list[WordEntry]:
    return [WordEntry.model_validate(make_entry(f"{prefix}{i}", f"nghĩa {prefix}{i}")) for i in range(count)]


def _set_payload(prefix: str = "w") -> list[dict]:
    return [make_entry(f"{prefix}{i}", f"nghĩa {prefix}{i}") for i in range(DAILY_SET_SIZE)]


def _user(db) -> int:
    user = User(email="learner@example.com", name="Learner", password_hash="x")
    db.add(user)
    db.commit()
    return user.id


@pytest.mark.parametrize(
    "correct, total, expected",
    [(14, 20, 70), (20, 20, 100), (0, 20, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 0, 0)],
)
def test_compute_score_rounds_half_up(correct, total, expected):
    assert compute_score(correct, total) == expected


def test_choices_contain_correct_meaning_and_are_distinct():
    entries = _entries(20)
    rng = random.Random(7)
    for index in range(len(entries)):
        options = build_choices(entries, index, rng)
        assert len(options) == CHOICES_PER_QUESTION
        assert len(set(options)) == CHOICES_PER_QUESTION
        assert entries[index].primary_meaning in options


def test_small_sets_are_padded_with_fillers():
    options = build_choices(_entries(1), 0, random.Random(1))
    assert len(options) == CHOICES_PER_QUESTION
    assert set(options) == {"nghĩa word0", *FILLER_OPTIONS[:3]}


def test_meaning_equal_to_a_filler_still_gets_four_options():
    entries = [WordEntry.model_validate(make_entry("dunno", FILLER_OPTIONS[0]))]
    options = build_choices(entries, 0, random.Random(2))
    assert len(options) == CHOICES_PER_QUESTION
    assert len(set(options)) == CHOICES_PER_QUESTION
    assert FILLER_OPTIONS[0] in options


def test_repeated_meanings_do_not_duplicate_options():
    entries = [
        WordEntry.model_validate(make_entry("big", "lớn")),
        WordEntry.model_validate(make_entry("large", "lớn")),
        WordEntry.model_validate(make_entry("small", "nhỏ")),
    ]
    options = build_choices(entries, 0, random.Random(3))
    assert options.count("lớn") == 1
    assert len(set(options)) == CHOICES_PER_QUESTION


def test_grade_splits_indices():
    entries = _entries(4)
    answers = ["nghĩa word0", "sai", None, "nghĩa word3"]
    result = grade(entries, answers)
    assert result.correct_answers == [0, 3]
    assert result.incorrect_answers == [1, 2]
    assert result.score == 50


def test_saving_a_set_twice_keeps_one_row(db):
    user_id = _user(db)
    svc = FlashcardService(db)

    first = svc.save_daily_set(user_id=user_id, date=TODAY, words=_entries(3))
    second = svc.save_daily_set(user_id=user_id, date=TODAY, words=_entries(2, prefix="other"))

    assert second.id == first.id
    assert [entry.word for entry in svc.entries_of(second)] == ["other0", "other1"]


def test_history_excludes_the_given_date(db):
    user_id = _user(db)
    svc = FlashcardService(db, rng=random.Random(0))
    svc.save_daily_set(user_id=user_id, date=TODAY, words=_entries(2, prefix="today"))
    svc.save_daily_set(user_id=user_id, date=YESTERDAY, words=_entries(3, prefix="old"))

    words = {entry.word for entry in svc.history_words(user_id=user_id, exclude_date=TODAY)}
    assert words == {"old0", "old1", "old2"}


def test_history_is_capped(db):
    user_id = _user(db)
    svc = FlashcardService(db)
    for offset in range(6):
        svc.save_daily_set(
            user_id=user_id,
            date=TODAY - dt.timedelta(days=offset),
            words=_entries(20, prefix=f"d{offset}-"),
        )
    assert len(svc.history_words(user_id=user_id)) == 100


def test_progress_needs_a_daily_set(db):
    user_id = _user(db)
    with pytest.raises(NotFoundError, match="Daily word set not found"):
        FlashcardService(db).save_progress(
            user_id=user_id, date=TODAY, correct_answers=[0], incorrect_answers=[], score=100
        )


def test_progress_rejects_out_of_range_indices(db):
    user_id = _user(db)
    svc = FlashcardService(db)
    svc.save_daily_set(user_id=user_id, date=TODAY, words=_entries(2))
    with pytest.raises(InvalidInputError):
        svc.save_progress(user_id=user_id, date=TODAY, correct_answers=[0, 5], incorrect_answers=[], score=100)


def test_progress_upsert_keeps_one_row(db):
    user_id = _user(db)
    svc = FlashcardService(db)
    svc.save_daily_set(user_id=user_id, date=TODAY, words=_entries(4))

    first = svc.save_progress(user_id=user_id, date=TODAY, correct_answers=[0], incorrect_answers=[1, 2, 3], score=25)
    second = svc.save_progress(user_id=user_id, date=TODAY, correct_answers=[0, 1, 2], incorrect_answers=[3], score=75)

    assert second.id == first.id
    assert second.score == 75
    assert second.correct_answers == [0, 1, 2]
    assert second.completed_at is not None


def test_submitting_answers_grades_and_saves(db):
    user_id = _user(db)
    svc = FlashcardService(db)
    entries = _entries(20)
    svc.save_daily_set(user_id=user_id, date=TODAY, words=entries)

    answers = [entry.primary_meaning for entry in entries[:14]] + ["sai"] * 6
    progress = svc.submit_answers(user_id=user_id, date=TODAY, answers=answers)

    assert progress.score == 70
    assert progress.correct_answers == list(range(14))
    assert progress.incorrect_answers == list(range(14, 20))
    assert svc.get_progress(user_id=user_id, date=TODAY).id == progress.id


@pytest.mark.asyncio
async def test_daily_set_endpoints(client: AsyncClient):
    await signup(client)
    day = TODAY.isoformat()

    resp = await client.get("/api/flashcards/daily-set", params={"date": day})
    assert resp.status_code == 200
    assert resp.json() == {"set": None}

    words = _set_payload()
    resp = await client.post("/api/flashcards/daily-set", json={"date": day, "wordData": words})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Word set saved successfully"
    assert body["set"]["date"] == day
    assert [w["word"] for w in body["set"]["wordData"]] == [w["word"] for w in words]

    resp = await client.get("/api/flashcards/daily-set", params={"date": day})
    assert resp.json()["set"]["id"] == body["set"]["id"]


@pytest.mark.asyncio
async def test_history_words_endpoint(client: AsyncClient):
    await signup(client)
    await client.post(
        "/api/flashcards/daily-set",
        json={"date": YESTERDAY.isoformat(), "wordData": _set_payload("old")},
    )
    await client.post(
        "/api/flashcards/daily-set",
        json={"date": TODAY.isoformat(), "wordData": _set_payload("new")},
    )

    resp = await client.get("/api/flashcards/daily-set", params={"excludeDate": TODAY.isoformat()})
    assert resp.status_code == 200
    words = {w["word"] for w in resp.json()["historyWords"]}
    assert words == {f"old{i}" for i in range(DAILY_SET_SIZE)}


@pytest.mark.asyncio
async def test_daily_set_rejects_malformed_entries(client: AsyncClient):
    await signup(client)
    resp = await client.post(
        "/api/flashcards/daily-set",
        json={"date": TODAY.isoformat(), "wordData": [{"word": "cat", "definitions": []}]},
    )
    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("size", [1, DAILY_SET_SIZE - 1, DAILY_SET_SIZE + 1])
async def test_daily_set_must_have_exactly_twenty_words(client: AsyncClient, size):
    await signup(client)
    words = [make_entry(f"w{i}", f"m{i}") for i in range(size)]
    resp = await client.post("/api/flashcards/daily-set", json={"date": TODAY.isoformat(), "wordData": words})
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert (await client.get("/api/flashcards/daily-set", params={"date": TODAY.isoformat()})).json() == {"set": None}


@pytest.mark.asyncio
async def test_progress_endpoints(client: AsyncClient):
    await signup(client)
    day = TODAY.isoformat()
    payload = {"date": day, "correctAnswers": [0], "incorrectAnswers": [1], "score": 50}

    resp = await client.post("/api/flashcards/progress", json=payload)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Daily word set not found"}

    await client.post("/api/flashcards/daily-set", json={"date": day, "wordData": _set_payload()})

    assert (await client.get("/api/flashcards/progress", params={"date": day})).json() == {"progress": None}

    resp = await client.post("/api/flashcards/progress", json=payload)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Progress saved successfully"
    assert resp.json()["progress"]["score"] == 50

    progress = (await client.get("/api/flashcards/progress", params={"date": day})).json()["progress"]
    assert progress["correctAnswers"] == [0]
    assert progress["incorrectAnswers"] == [1]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [{"score": 101}, {"score": -1}, {"correctAnswers": [0, 0]}, {"incorrectAnswers": [-1]}],
)
async def test_progress_payload_validation(client: AsyncClient, overrides):
    await signup(client)
    payload = {"date": TODAY.isoformat(), "correctAnswers": [0], "incorrectAnswers": [], "score": 100}
    payload.update(overrides)
    resp = await client.post("/api/flashcards/progress", json=payload)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_flashcard_endpoints_require_session(client: AsyncClient):
    assert (await client.get("/api/flashcards/daily-set", params={"date": TODAY.isoformat()})).status_code == 401
    assert (await client.get("/api/flashcards/candidates")).status_code == 401


@pytest.mark.asyncio
async def test_daily_quiz_round_trip(client: AsyncClient):
    await signup(client)
    day = TODAY.isoformat()
    words = _set_payload()
    await client.post("/api/flashcards/daily-set", json={"date": day, "wordData": words})

    quiz = (await client.get("/api/flashcards/quiz", params={"date": day})).json()
    assert quiz["mode"] == "daily"
    assert len(quiz["questions"]) == DAILY_SET_SIZE
    for question in quiz["questions"]:
        assert question["entry"]["definitions"][0]["vi_meaning"] in question["options"]
        assert len(question["options"]) == 4

    answers = [w["definitions"][0]["vi_meaning"] for w in words[:3]] + ["sai"] * 16 + [None]
    resp = await client.post("/api/flashcards/quiz/submit", json={"date": day, "answers": answers})
    assert resp.status_code == 200
    progress = resp.json()["progress"]
    assert progress["score"] == 15
    assert progress["correctAnswers"] == [0, 1, 2]
    assert progress["incorrectAnswers"] == list(range(3, DAILY_SET_SIZE))

    quiz = (await client.get("/api/flashcards/quiz", params={"date": day})).json()
    assert quiz["progress"]["score"] == 15


@pytest.mark.asyncio
async def test_daily_quiz_without_set(client: AsyncClient):
    await signup(client)
    resp = await client.get("/api/flashcards/quiz", params={"date": TODAY.isoformat()})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_history_quiz_is_graded_without_saving(client: AsyncClient):
    await signup(client)
    words = [make_entry("cat", "con mèo"), make_entry("dog", "con chó")]
    resp = await client.post("/api/flashcards/quiz/history", json={"words": words, "answers": ["con mèo", "sai"]})
    assert resp.status_code == 200
    assert resp.json() == {"correctAnswers": [0], "incorrectAnswers": [1], "score": 50}

    resp = await client.post("/api/flashcards/quiz/history", json={"words": words, "answers": ["con mèo"]})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_selected_words_and_candidates(client: AsyncClient):
    await signup(client)
    resp = await client.post(
        "/api/flashcards/selected-words/bulk",
        json={"words": ["apple", "book", "car"], "selectedDate": TODAY.isoformat()},
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Successfully saved 3 words to history", "savedCount": 3}

    candidates = (await client.get("/api/flashcards/candidates")).json()["candidates"]
    words = {entry["word"] for entry in candidates}
    assert candidates
    assert not words & {"apple", "book", "car"}

    sample = (await client.get("/api/flashcards/selected-words")).json()["words"]
    assert sorted(sample) == ["apple", "book", "car"]
