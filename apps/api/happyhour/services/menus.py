"""PDF menus: upload and analyze, re-analyze a stored menu, signed links, retrieval."""

import logging

from fastapi import HTTPException, UploadFile, status

from happyhour.core import get_settings, PDF_MEDIA_TYPE
from happyhour.db.objects import ObjectNotFoundError, resolve_menu_path
from happyhour.providers import AnalysisServiceError, PdfAnalysisProvider, get_analysis_provider
from happyhour.schemas import MenuAnalysisResponse, MenuUrlResponse
from happyhour.services.bars import BarWorkspace, load_state
from happyhour.services.happy_hours import EditState, PendingMenu, apply_analysis

logger = logging.getLogger(__name__)


async def read_menu_upload(file: UploadFile) -> tuple[str, bytes]:
    """Validate an uploaded menu; returns (filename, content)."""
    filename = (file.filename or "").strip() or "menu.pdf"
    media_type = (file.content_type or "").strip().lower()
    if media_type and media_type not in (PDF_MEDIA_TYPE, "application/octet-stream"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only PDF menus are allowed")
    if media_type != PDF_MEDIA_TYPE and not filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only PDF menus are allowed")
    max_bytes = get_settings().menu_max_bytes
    content = await file.read(max_bytes + 1)
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Menu file is empty")
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Menu must be under {max_bytes // (1024 * 1024)}MB",
        )
    return filename, content


async def analyze_menu(
    state: EditState,
    filename: str,
    content: bytes,
    objects,
    provider: PdfAnalysisProvider | None = None,
) -> MenuAnalysisResponse:
    """Select the PDF for the bar, analyze it, and reconcile the result into the draft.

    Analysis failures (including a missing API URL) and storage failures while
    keeping the PDF for new entries are logged and reported as
    ``status="failed"``; the draft is untouched and the PDF stays selected.
    """
    state.select_menu(filename, content)
    try:
        provider = provider or get_analysis_provider()
        analysis = await provider.analyze(filename, content)
    except AnalysisServiceError as e:
        logger.warning("Error analyzing menu %s for bar %s: %s", filename, state.bar_id, e)
        return MenuAnalysisResponse(status="failed", editing=state.editing, detail=str(e))

    try:
        async with objects.savepoint():
            added = await apply_analysis(state, analysis.happy_hours, content, objects)
    except Exception:
        logger.exception("Error storing menu %s for bar %s", filename, state.bar_id)
        return MenuAnalysisResponse(status="failed", editing=state.editing, detail="Failed to store menu")

    return MenuAnalysisResponse(
        status="reconciled" if added else "empty",
        added=added,
        editing=state.editing,
    )


async def upload_menu(
    ws: BarWorkspace,
    bar_id: str,
    file: UploadFile,
    provider: PdfAnalysisProvider | None = None,
) -> MenuAnalysisResponse:
    filename, content = await read_menu_upload(file)
    state = await load_state(ws, bar_id)
    result = await analyze_menu(state, filename, content, ws.objects, provider)
    await ws.sessions.save(ws.user_id, state)
    return result


async def fetch_menu_pdf(objects, entry_id: str) -> bytes:
    """Bytes of an entry's stored menu; raises ObjectNotFoundError."""
    path = await resolve_menu_path(objects, entry_id)
    content, _ = await objects.download_bytes(path)
    return content


async def reanalyze_entry_menu(
    ws: BarWorkspace,
    bar_id: str,
    entry_id: str,
    provider: PdfAnalysisProvider | None = None,
) -> MenuAnalysisResponse:
    """Run the stored menu of an existing entry through analysis again."""
    state = await load_state(ws, bar_id)
    try:
        content = await fetch_menu_pdf(ws.objects, entry_id)
    except ObjectNotFoundError:
        logger.warning("No stored menu for happy hour %s of bar %s", entry_id, bar_id)
        return MenuAnalysisResponse(status="failed", editing=state.editing, detail="PDF not found")
    result = await analyze_menu(state, f"{entry_id}.pdf", content, ws.objects, provider)
    await ws.sessions.save(ws.user_id, state)
    return result


async def get_menu_url(ws: BarWorkspace, bar_id: str, entry_id: str) -> MenuUrlResponse:
    state = await load_state(ws, bar_id)
    if state.displayed.find_entry(entry_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Happy hour not found")
    try:
        path = await resolve_menu_path(ws.objects, entry_id)
        url = await ws.objects.get_download_url(path)
    except ObjectNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="PDF not found")
    return MenuUrlResponse(url=url)


async def get_pending_menu(ws: BarWorkspace, bar_id: str) -> PendingMenu:
    state = await load_state(ws, bar_id)
    if state.pending_menu is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No menu selected")
    return state.pending_menu

