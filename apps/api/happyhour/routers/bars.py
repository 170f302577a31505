from fastapi import APIRouter, Depends, Request, UploadFile
from fastapi.responses import Response

from happyhour.core import limiter, PDF_MEDIA_TYPE
from happyhour.dependencies import get_workspace
from happyhour.schemas import (
    BarSummary,
    BarView,
    DraftUpdateRequest,
    MenuAnalysisResponse,
    MenuUrlResponse,
)
from happyhour.services import bars as bar_service
from happyhour.services import menus as menu_service
from happyhour.services.bars import BarWorkspace

router = APIRouter(prefix="/bars", tags=["bars"])


@router.get("", response_model=list[BarSummary])
async def list_bars(ws: BarWorkspace = Depends(get_workspace)):
    return await bar_service.list_bars(ws)


@router.get("/{bar_id}", response_model=BarView)
async def get_bar(bar_id: str, ws: BarWorkspace = Depends(get_workspace)):
    return await bar_service.get_bar_view(ws, bar_id)


@router.post("/{bar_id}/edit", response_model=BarView)
async def begin_edit(bar_id: str, ws: BarWorkspace = Depends(get_workspace)):
    return await bar_service.begin_edit(ws, bar_id)


@router.post("/{bar_id}/cancel", response_model=BarView)
async def cancel_edit(bar_id: str, ws: BarWorkspace = Depends(get_workspace)):
    """Discard the draft and any selected menu PDF."""
    return await bar_service.cancel_edit(ws, bar_id)


@router.post("/{bar_id}/save", response_model=BarView)
async def save_bar(bar_id: str, ws: BarWorkspace = Depends(get_workspace)):
    return await bar_service.save_bar(ws, bar_id)


@router.put("/{bar_id}/draft", response_model=BarView)
async def update_draft(
    bar_id: str,
    body: DraftUpdateRequest,
    ws: BarWorkspace = Depends(get_workspace),
):
    return await bar_service.update_draft(ws, bar_id, body)


@router.post("/{bar_id}/draft/happy-hours", response_model=BarView)
async def add_happy_hour(bar_id: str, ws: BarWorkspace = Depends(get_workspace)):
    """Append an empty happy hour to the draft."""
    return await bar_service.add_happy_hour(ws, bar_id)


@router.delete("/{bar_id}/draft/happy-hours/{entry_id}", response_model=BarView)
async def remove_happy_hour(bar_id: str, entry_id: str, ws: BarWorkspace = Depends(get_workspace)):
    return await bar_service.remove_happy_hour(ws, bar_id, entry_id)


@router.post("/{bar_id}/menu", response_model=MenuAnalysisResponse)
@limiter.limit("10/minute")
async def upload_menu(
    request: Request,
    bar_id: str,
    file: UploadFile,
    ws: BarWorkspace = Depends(get_workspace),
):
    """Select a PDF menu, analyze it, and add the happy hours found to the draft."""
    return await menu_service.upload_menu(ws, bar_id, file)


@router.get("/{bar_id}/menu")
async def get_selected_menu(bar_id: str, ws: BarWorkspace = Depends(get_workspace)):
    """Preview of the selected, not yet saved PDF menu."""
    menu = await menu_service.get_pending_menu(ws, bar_id)
    filename = menu.filename.replace('"', "")
    return Response(
        content=menu.content,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )


@router.post("/{bar_id}/happy-hours/{entry_id}/analyze", response_model=MenuAnalysisResponse)
@limiter.limit("10/minute")
async def reanalyze_menu(
    request: Request,
    bar_id: str,
    entry_id: str,
    ws: BarWorkspace = Depends(get_workspace),
):
    return await menu_service.reanalyze_entry_menu(ws, bar_id, entry_id)


@router.get("/{bar_id}/happy-hours/{entry_id}/menu-url", response_model=MenuUrlResponse)
async def get_menu_url(bar_id: str, entry_id: str, ws: BarWorkspace = Depends(get_workspace)):
    return await menu_service.get_menu_url(ws, bar_id, entry_id)
