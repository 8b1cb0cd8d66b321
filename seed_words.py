#!/usr/bin/env python3
"""Seed the suggestion dictionary.

Usage: python seed_words.py [--file seed/en.txt] [--language en] [--max N] [--from-catalog]
"""
import argparse
import logging
import sys
from pathlib import Path

from core.config import settings
from core.database import Base, SessionLocal, engine
from models import word  # noqa: F401
from services.catalog_services import WordCatalog
from services.translation_services import SuggestionService

logger = logging.getLogger("seed_words")

MAX_WORD_CHARS = 255
BATCH_SIZE = 1000


def read_word_list(path: Path, limit: int | None = None) -> list[str]:
    """One word per line; blank lines, ``#`` comments and over-long lines are skipped."""
    words: list[str] = []
    with path.open(encoding="utf-8") as content:
        for line in content:
            candidate = line.strip()
            if not candidate or candidate.startswith("#") or len(candidate) > MAX_WORD_CHARS:
                continue
            words.append(candidate)
            if limit is not None and len(words) >= limit:
                break
    return list(dict.fromkeys(words))


def seed(words: list[str], language: str) -> int:
    db = SessionLocal()
    try:
        svc = SuggestionService(db)
        inserted = 0
        for start in range(0, len(words), BATCH_SIZE):
            inserted += svc.seed(words[start:start + BATCH_SIZE], language)
        return inserted
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed suggestion words")
    parser.add_argument("--file", default="seed/en.txt", help="Word list, one word per line")
    parser.add_argument("--language", choices=["en", "vi"], default="en")
    parser.add_argument("--max", type=int, default=None, help="Max words to import")
    parser.add_argument("--from-catalog", action="store_true", help="Seed English headwords from the word catalog")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")

    if args.from_catalog:
        catalog = WordCatalog.from_file(settings.WORDS_FILE)
        words = [entry.word for entry in catalog.entries][: args.max]
        language = "en"
    else:
        path = Path(args.file)
        if not path.exists():
            logger.error("Word list not found: %s", path)
            sys.exit(1)
        words = read_word_list(path, limit=args.max)
        language = args.language

    Base.metadata.create_all(bind=engine)
    inserted = seed(words, language)
    logger.info("Seeded %d new %s words (%d read)", inserted, language, len(words))


if __name__ == "__main__":
    main()
