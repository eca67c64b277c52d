import time
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends
from fastapi.responses import JSONResponse

from photoalbum.deps import get_photo_service
from photoalbum.routers.photos import (
    FLASH_COOKIE,
    FLASH_DELETED,
    FLASH_NOT_FOUND,
    to_summary,
)
from photoalbum.schemas import GalleryResponse
from photoalbum.service import PhotoService

router = APIRouter()

SUCCESS_MESSAGES = {FLASH_DELETED: "Photo deleted successfully"}
ERROR_MESSAGES = {FLASH_NOT_FOUND: "Photo not found or could not be deleted"}


@router.get("/", summary="Gallery", response_model=GalleryResponse)
def gallery(
    service: Annotated[PhotoService, Depends(get_photo_service)],
    flash: Annotated[str | None, Cookie(alias=FLASH_COOKIE)] = None,
) -> JSONResponse:
    """
    List every photo, newest first, plus any pending notice from a delete.
    """
    body = GalleryResponse(
        photos=[to_summary(photo) for photo in service.get_all_photos()],
        # lets clients bust cached thumbnails
        timestamp=int(time.time() * 1000),
        success_message=SUCCESS_MESSAGES.get(flash or ""),
        error_message=ERROR_MESSAGES.get(flash or ""),
    )
    response = JSONResponse(content=body.model_dump(mode="json"))
    if flash is not None:
        response.delete_cookie(FLASH_COOKIE)
    return response
