from datetime import datetime

from pydantic import BaseModel


class PhotoListResponse(BaseModel):
    photo_ids: list[str]
    total: int


class PhotoSummary(BaseModel):
    id: str
    original_file_name: str
    file_size: int
    mime_type: str
    uploaded_at: datetime
    width: int | None
    height: int | None
    url: str


class PhotoDetail(PhotoSummary):
    stored_file_name: str


class GalleryResponse(BaseModel):
    photos: list[PhotoSummary]
    timestamp: int
    success_message: str | None = None
    error_message: str | None = None


class PhotoDetailResponse(BaseModel):
    photo: PhotoDetail
    previous_photo_id: str | None
    next_photo_id: str | None


class UploadedPhoto(BaseModel):
    id: str
    original_file_name: str


class FailedUpload(BaseModel):
    file_name: str
    error: str


class UploadResponse(BaseModel):
    success: bool
    uploaded_photos: list[UploadedPhoto]
    failed_uploads: list[FailedUpload]
