from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.status import (
    HTTP_302_FOUND,
    HTTP_303_SEE_OTHER,
    HTTP_404_NOT_FOUND,
)

from photoalbum.deps import get_photo_service
from photoalbum.models import Photo, as_utc
from photoalbum.schemas import (
    PhotoDetail,
    PhotoDetailResponse,
    PhotoListResponse,
    PhotoSummary,
)
from photoalbum.service import PhotoService

router = APIRouter()

FLASH_COOKIE = "flash"
FLASH_DELETED = "deleted"
FLASH_NOT_FOUND = "not_found"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate, private",
    "Pragma": "no-cache",
    "Expires": "0",
}


def photo_url(photo_id: str) -> str:
    return f"/photo/{photo_id}"


def to_summary(photo: Photo) -> PhotoSummary:
    return PhotoSummary(
        id=photo.id,
        original_file_name=photo.original_file_name,
        file_size=photo.file_size,
        mime_type=photo.mime_type,
        uploaded_at=as_utc(photo.uploaded_at),
        width=photo.width,
        height=photo.height,
        url=photo_url(photo.id),
    )


def not_found() -> JSONResponse:
    return JSONResponse(status_code=HTTP_404_NOT_FOUND, content={"detail": "Photo not found"})


@router.get("/photos", response_model=PhotoListResponse)
def get_photos(
    service: Annotated[PhotoService, Depends(get_photo_service)],
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> PhotoListResponse:
    photos = service.get_page(limit=limit, offset=offset)
    return PhotoListResponse(
        photo_ids=[photo.id for photo in photos],
        total=service.count_photos(),
    )


@router.get("/photo/{photo_id}")
def serve_photo(
    photo_id: str,
    service: Annotated[PhotoService, Depends(get_photo_service)],
) -> Response:
    """
    Return the stored image bytes with their MIME type and no-cache headers.
    """
    if not photo_id.strip():
        return not_found()
    photo = service.get_photo_by_id(photo_id)
    if photo is None:
        return not_found()
    headers = {
        **NO_CACHE_HEADERS,
        "X-Photo-ID": photo.id,
        # header values must be latin-1
        "X-Photo-Name": quote(photo.original_file_name, safe=" ()-._~,+"),
    }
    return Response(content=photo.photo_data, media_type=photo.mime_type, headers=headers)


@router.get("/detail/{photo_id}", response_model=PhotoDetailResponse)
def photo_detail(
    photo_id: str,
    service: Annotated[PhotoService, Depends(get_photo_service)],
) -> PhotoDetailResponse | RedirectResponse:
    photo = service.get_photo_by_id(photo_id)
    if photo is None:
        return RedirectResponse(url="/", status_code=HTTP_302_FOUND)
    previous_photo = service.get_previous_photo(photo)
    next_photo = service.get_next_photo(photo)
    return PhotoDetailResponse(
        photo=PhotoDetail(
            **to_summary(photo).model_dump(),
            stored_file_name=photo.stored_file_name,
        ),
        previous_photo_id=previous_photo.id if previous_photo else None,
        next_photo_id=next_photo.id if next_photo else None,
    )


@router.post("/detail/{photo_id}/delete")
def delete_photo(
    photo_id: str,
    service: Annotated[PhotoService, Depends(get_photo_service)],
) -> RedirectResponse:
    """
    Delete a photo and go back to the gallery, whether or not it existed.
    """
    deleted = service.delete_photo(photo_id)
    response = RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)
    response.set_cookie(FLASH_COOKIE, FLASH_DELETED if deleted else FLASH_NOT_FOUND)
    return response
