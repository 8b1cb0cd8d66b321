"""Prompt construction and the generative-AI call behind translations.

The provider is hidden behind ``TextGenerator`` so prompt building can be
exercised without network access.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from core.config import settings

logger = logging.getLogger(__name__)

# Bump whenever a prompt template changes; it is part of the translation cache key.
PROMPT_VERSION = "2"

MAX_WORD_LENGTH = 30

LANGUAGE_NAMES = {
    "en": "English",
    "vi": "Vietnamese",
}


def is_likely_word(text: str) -> bool:
    trimmed = text.strip()
    return " " not in trimmed and len(trimmed) <= MAX_WORD_LENGTH


@dataclass(frozen=True)
class TranslationRequest:
    text: str
    source_language: str
    target_language: str
    is_word: bool


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


class GeminiGenerator:
    """Calls the Google Generative Language REST API."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.AI_TIMEOUT_SECONDS

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise RuntimeError("GOOGLE_API_KEY is not configured")
        client_kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        async with httpx.AsyncClient(**client_kwargs) as client:
            r = await client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                params={"key": self.api_key},
                json={"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
            )
            r.raise_for_status()
        return _extract_text(r.json())


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        raise ValueError("Generation response contained no candidates")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts)
    if not text.strip():
        raise ValueError("Generation response contained no text")
    return text


def _language_names(request: TranslationRequest) -> tuple[str, str]:
    return LANGUAGE_NAMES[request.source_language], LANGUAGE_NAMES[request.target_language]


def _sense_block(number: int, label: str, source: str, target: str) -> str:
    return (
        f"{number}. **[{label} in {target}]** - [Short context in {target}]\n"
        f"   - Example 1: [Sentence in {source}]\n"
        f"     → Translation: [Translation in {target}]\n"
        f"\n"
        f"   - Example 2: [Sentence in {source}]\n"
        f"     → Translation: [Translation in {target}]\n"
    )


def build_word_prompt(request: TranslationRequest) -> str:
    source, target = _language_names(request)
    word = request.text
    senses = "\n".join(
        _sense_block(number, label, source, target)
        for number, label in enumerate(
            ("Most common translation", "Alternative translation", "Another meaning"),
            start=1,
        )
    )
    return f"""You are a professional bilingual dictionary. Write the dictionary entry for the {source} word "{word}" translated into {target}.

Use EXACTLY this layout:

**{word}**

**Phonetic:** [IPA transcription, e.g. /ˈwɜːrd/]

**Part of Speech:** [noun/verb/adjective/adverb/...]

**Definitions:**

{senses}
Direction: {source} → {target}.

Rules for every numbered line:
- Start with the short, direct translation in bold, e.g. "1. **cầu lông** - một môn thể thao dùng vợt".
- Never put a long explanatory definition in bold in place of the translation.
- The bold translation and the context after " - " are both written in {target}; do not mix languages on that line.
- Give 2-3 senses when the word has them, most common first.
- Every sense has exactly two examples: the sentence in {source}, then a line starting with "→ Translation:" in {target}.
- Examples must be natural and practical; explanations stay brief.
- The phonetic transcription must be accurate IPA.
- Do not add a "Usage Notes" section or anything outside this layout."""


_SENTENCE_EXAMPLES = {
    ("vi", "en"): """- "ăn cơm chưa?" → not "Have you eaten rice yet?" but "Have you eaten?"
- "hôm nay tôi muốn đi chơi" → not "Today I want to go out and play" but "I feel like going out today"
- A two-paragraph input stays two paragraphs in the output.""",
    ("en", "vi"): """- "How's it going?" → not "Nó đang đi như thế nào?" but "Dạo này thế nào?"
- "I'm heading out" → not "Tôi đang hướng ra ngoài" but "Tôi ra ngoài đây"
- A two-paragraph input stays two paragraphs in the output.""",
}


def build_sentence_prompt(request: TranslationRequest) -> str:
    source, target = _language_names(request)
    examples = _SENTENCE_EXAMPLES.get((request.source_language, request.target_language), "")
    return f"""You are a professional translator. Translate the following {source} text into natural, idiomatic {target}:

\"\"\"{request.text}\"\"\"

Rules:
- Output ONLY the translation: no explanations, notes, or reasoning.
- Keep the original layout exactly: line breaks, blank lines, paragraphs and spacing.
- Match the tone and register of the original (formal or casual).
- Prefer natural expressions over literal word-for-word renderings.

Natural versus literal:
{examples}

OUTPUT: the {target} translation only."""


def build_prompt(request: TranslationRequest) -> str:
    if request.is_word:
        return build_word_prompt(request)
    return build_sentence_prompt(request)


async def translate_with_ai(request: TranslationRequest, generator: TextGenerator) -> str:
    prompt = build_prompt(request)
    logger.debug(
        "Requesting %s-mode translation %s->%s (%d chars)",
        "word" if request.is_word else "sentence",
        request.source_language,
        request.target_language,
        len(request.text),
    )
    return await generator.generate(prompt)
