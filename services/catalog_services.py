"""The dictionary catalog loaded from words.jsonl."""

import logging
import random
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from core.config import settings
from schemas.word import WordEntry

logger = logging.getLogger(__name__)

CANDIDATE_POOL_SIZE = 50


def parse_lines(lines: Iterable[str], *, source: str = "<lines>") -> list[WordEntry]:
    """Parse newline-delimited JSON entries, dropping malformed lines and repeated headwords."""
    entries: list[WordEntry] = []
    seen: set[str] = set()
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            entry = WordEntry.model_validate_json(line)
        except ValidationError as exc:
            logger.warning("Skipping %s:%d: %s", source, line_number, exc.errors()[0].get("msg"))
            continue
        if entry.word in seen:
            continue
        seen.add(entry.word)
        entries.append(entry)
    return entries


class WordCatalog:
    def __init__(self, entries: list[WordEntry], path: Path | None = None):
        self.entries = entries
        self.path = path

    @classmethod
    def from_file(cls, path: str | Path) -> "WordCatalog":
        path = Path(path)
        with path.open(encoding="utf-8") as content:
            entries = parse_lines(content, source=str(path))
        logger.info("Loaded %d dictionary entries from %s", len(entries), path)
        return cls(entries, path=path)

    def __len__(self) -> int:
        return len(self.entries)

    def search(self, term: str | None) -> list[WordEntry]:
        needle = (term or "").strip().lower()
        if not needle:
            return list(self.entries)

        def matches(entry: WordEntry) -> bool:
            if needle in entry.word.lower() or needle in entry.part_of_speech.lower():
                return True
            return any(
                needle in definition.vi_meaning.lower() or needle in definition.en_definition.lower()
                for definition in entry.definitions
            )

        return [entry for entry in self.entries if matches(entry)]

    def candidate_pool(
        self,
        exclude: set[str],
        size: int = CANDIDATE_POOL_SIZE,
        rng: random.Random | None = None,
    ) -> list[WordEntry]:
        rng = rng or random.Random()
        available = [entry for entry in self.entries if entry.word not in exclude]
        return rng.sample(available, min(size, len(available)))


@lru_cache(maxsize=1)
def _load_default_catalog(path: str) -> WordCatalog:
    return WordCatalog.from_file(path)


# dependency
def get_catalog() -> WordCatalog:
    return _load_default_catalog(settings.WORDS_FILE)
