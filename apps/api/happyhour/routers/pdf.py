import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from happyhour.core import decode_object_token, PDF_MEDIA_TYPE, PDF_CACHE_CONTROL
from happyhour.db.objects import ObjectNotFoundError, ObjectStore
from happyhour.dependencies import get_object_store
from happyhour.services.menus import fetch_menu_pdf

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pdf"])


@router.get("/pdf/{entry_id}")
async def get_menu_pdf(entry_id: str, objects: ObjectStore = Depends(get_object_store)):
    """Stream the stored PDF menu of a happy hour. Any failure is a plain 404."""
    try:
        content = await fetch_menu_pdf(objects, entry_id)
    except Exception:
        logger.warning("Error fetching PDF for happy hour %s", entry_id, exc_info=True)
        return PlainTextResponse("PDF not found", status_code=404)
    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers={"Cache-Control": PDF_CACHE_CONTROL},
    )


@router.get("/objects/{path:path}")
async def get_object(
    path: str,
    t: str = Query(..., description="Signed token from a download URL"),
    objects: ObjectStore = Depends(get_object_store),
):
    """Serve a stored object for a signed download URL."""
    if decode_object_token(t) != path:
        raise HTTPException(status_code=403, detail="Invalid or expired link")
    try:
        content, media_type = await objects.download_bytes(path)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Object not found")
    return Response(content=content, media_type=media_type)
