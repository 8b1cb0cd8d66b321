import hashlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from core.errors import InvalidInputError, UpstreamError
from repositories.translation_cache_repo import TranslationCacheRepository
from repositories.word_repo import WordRepository
from services.ai_services import (
    LANGUAGE_NAMES,
    PROMPT_VERSION,
    TextGenerator,
    TranslationRequest,
    is_likely_word,
    translate_with_ai,
)

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10
MIN_PREFIX_MATCHES = 5


def make_cache_key(text: str, source_language: str, target_language: str, prompt_version: str = PROMPT_VERSION) -> str:
    raw = "\x1f".join((prompt_version, source_language, target_language, text))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class TranslationResult:
    translation: str
    is_word: bool
    from_cache: bool


class TranslationService:
    def __init__(self, db: Session, generator: TextGenerator):
        self.db = db
        self.cache = TranslationCacheRepository(db)
        self.generator = generator

    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        force_regenerate: bool = False,
    ) -> TranslationResult:
        trimmed = (text or "").strip()
        if not trimmed:
            raise InvalidInputError("Please enter text to translate")
        if source_language not in LANGUAGE_NAMES or target_language not in LANGUAGE_NAMES:
            raise InvalidInputError("Unsupported language")

        is_word = is_likely_word(trimmed)
        cache_key = make_cache_key(trimmed, source_language, target_language)

        try:
            if not force_regenerate:
                cached = self.cache.get(cache_key)
                if cached is not None:
                    logger.debug("Translation cache hit for %s", cache_key[:12])
                    return TranslationResult(translation=cached.translation, is_word=is_word, from_cache=True)

            logger.debug("Translation cache %s for %s", "bypass" if force_regenerate else "miss", cache_key[:12])
            translation = await translate_with_ai(
                TranslationRequest(
                    text=trimmed,
                    source_language=source_language,
                    target_language=target_language,
                    is_word=is_word,
                ),
                self.generator,
            )
            self.cache.upsert(
                cache_key=cache_key,
                source_text=trimmed,
                source_language=source_language,
                target_language=target_language,
                prompt_version=PROMPT_VERSION,
                translation=translation,
                is_word=is_word,
            )
        except Exception as exc:
            self.db.rollback()
            logger.exception("Translation failed (%s -> %s)", source_language, target_language)
            raise UpstreamError("Failed to translate. Please try again.") from exc

        return TranslationResult(translation=translation, is_word=is_word, from_cache=False)


class SuggestionService:
    def __init__(self, db: Session):
        self.repo = WordRepository(db)

    def suggest(self, query: str, language: str) -> list[str]:
        if not query:
            return []

        prefix_matches = self.repo.find_prefix(query=query, language=language, limit=SUGGESTION_LIMIT)
        if len(prefix_matches) >= MIN_PREFIX_MATCHES:
            return prefix_matches

        contains_matches = self.repo.find_containing(query=query, language=language, limit=SUGGESTION_LIMIT)
        merged = list(dict.fromkeys(prefix_matches + contains_matches))
        return merged[:SUGGESTION_LIMIT]

    def seed(self, words: list[str], language: str) -> int:
        return self.repo.add_many(words=words, language=language)
