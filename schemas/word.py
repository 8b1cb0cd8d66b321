from pydantic import BaseModel, Field, constr


class WordExample(BaseModel):
    en: str = ""
    vi: str = ""


class WordDefinition(BaseModel):
    vi_meaning: str = ""
    en_definition: str = ""
    examples: list[WordExample] = Field(default_factory=list)


class WordEntry(BaseModel):
    """One dictionary entry, as stored in words.jsonl and in daily word sets."""

    word: constr(strip_whitespace=True, min_length=1, max_length=255)
    phonetic: str = ""
    part_of_speech: str = ""
    definitions: list[WordDefinition] = Field(min_length=1)

    @property
    def primary_meaning(self) -> str:
        return self.definitions[0].vi_meaning


class WordSearchOut(BaseModel):
    total: int
    words: list[WordEntry]


class CandidatesOut(BaseModel):
    candidates: list[WordEntry]
