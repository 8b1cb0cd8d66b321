"""Shared fixtures: in-memory SQLite, an ASGI client with a cookie jar, a fake AI generator."""

import os
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tests")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_COOKIE_CSRF_PROTECT"] = "false"
os.environ["WORDS_FILE"] = str(ROOT / "data" / "words.jsonl")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db  # noqa: E402
from main import app  # noqa: E402
from routers.translate import get_generator  # noqa: E402

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=test_engine, autoflush=False, autocommit=False)


class FakeGenerator:
    """Stands in for the AI provider; records every prompt it is given."""

    def __init__(self, reply: str = "translated"):
        self.reply = reply
        self.prompts: list[str] = []
        self.error: Exception | None = None

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return f"{self.reply} #{len(self.prompts)}"

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
def db():
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def generator():
    fake = FakeGenerator()
    app.dependency_overrides[get_generator] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_generator, None)


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def server_error_client():
    """Client that receives the 500 response instead of the re-raised exception."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def signup(
    client: AsyncClient,
    email: str = "learner@example.com",
    password: str = "secret123",
    name: str = "Learner",
) -> None:
    """Helper: register a user; the session cookie lands in the client's jar."""
    resp = await client.post("/auth/signup", data={"email": email, "password": password, "name": name})
    assert resp.status_code == 200, f"Signup failed: {resp.text}"
    assert resp.json() == {"success": True}


async def logout(client: AsyncClient) -> None:
    resp = await client.post("/auth/logout")
    assert resp.status_code == 200
    client.cookies.clear()


def make_entry(word: str, meaning: str, **extra) -> dict:
    """Helper: a minimal dictionary entry payload."""
    entry = {
        "word": word,
        "phonetic": extra.get("phonetic", ""),
        "part_of_speech": extra.get("part_of_speech", "noun"),
        "definitions": [
            {
                "vi_meaning": meaning,
                "en_definition": extra.get("en_definition", f"definition of {word}"),
                "examples": [],
            }
        ],
    }
    return entry
