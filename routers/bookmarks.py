from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from routers.auth import current_principal
from schemas.auth import Principal
from schemas.bookmark import BookmarkIn, BookmarkOut
from services.bookmark_services import BookmarkService

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("")
async def add_bookmark(
    data: BookmarkIn,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    BookmarkService(db).add(
        user_id=principal.id,
        word=data.word,
        language=data.language,
        translation=data.translation,
    )
    return {"success": True}


@router.delete("/{bookmark_id}")
async def remove_bookmark(
    bookmark_id: int,
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    BookmarkService(db).remove(user_id=principal.id, bookmark_id=bookmark_id)
    return {"success": True}


@router.get("/search", response_model=list[BookmarkOut])
async def search_bookmarks(
    query: str = Query("", max_length=255),
    principal: Principal = Depends(current_principal),
    db: Session = Depends(get_db),
):
    bookmarks = BookmarkService(db).search(user_id=principal.id, query=query)
    return [BookmarkOut.model_validate(bookmark) for bookmark in bookmarks]
