from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse

from schemas.word import WordSearchOut
from services.catalog_services import WordCatalog, get_catalog

router = APIRouter(tags=["words"])


@router.get("/words.jsonl", include_in_schema=False)
async def words_file(catalog: WordCatalog = Depends(get_catalog)):
    return FileResponse(catalog.path, media_type="application/x-ndjson")


@router.get("/api/words", response_model=WordSearchOut)
async def search_words(
    q: str = Query("", max_length=255),
    catalog: WordCatalog = Depends(get_catalog),
):
    words = catalog.search(q)
    return WordSearchOut(total=len(words), words=words)
