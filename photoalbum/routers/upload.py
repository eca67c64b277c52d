from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from photoalbum.deps import get_photo_service
from photoalbum.schemas import FailedUpload, UploadedPhoto, UploadResponse
from photoalbum.service import PhotoService
from photoalbum.validation import MAX_FILE_SIZE

router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
def upload(
    service: Annotated[PhotoService, Depends(get_photo_service)],
    files: Annotated[list[UploadFile] | None, File()] = None,
) -> UploadResponse | JSONResponse:
    """
    Store one or more images. Each file is validated on its own, so a batch
    can partly succeed.
    """
    if not files:
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={"detail": "No files provided"},
        )

    payloads = []
    for file in files:
        # one byte past the limit is enough for the size check to reject it
        data = file.file.read(MAX_FILE_SIZE + 1)
        payloads.append((file.filename, file.content_type, data))

    batch = service.upload_photos(payloads)
    return UploadResponse(
        success=batch.success,
        uploaded_photos=[
            UploadedPhoto(id=result.photo_id, original_file_name=result.file_name)
            for result in batch.uploaded
            if result.photo_id is not None
        ],
        failed_uploads=[
            FailedUpload(file_name=result.file_name, error=result.error_message or "")
            for result in batch.failed
        ],
    )
