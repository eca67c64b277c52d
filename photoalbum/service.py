import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from photoalbum.dao import PhotoDAO
from photoalbum.imaging import extract_dimensions
from photoalbum.models import Photo, stored_name_for
from photoalbum.validation import UploadValidationError, validate_upload

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "unnamed"


@dataclass(frozen=True)
class UploadResult:
    success: bool
    file_name: str
    photo_id: str | None = None
    error_message: str | None = None


@dataclass
class BatchUploadResult:
    uploaded: list[UploadResult] = field(default_factory=list)
    failed: list[UploadResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return bool(self.uploaded) and not self.failed


class PhotoService:
    """Upload pipeline and navigation on top of PhotoDAO."""

    def __init__(self, dao: PhotoDAO) -> None:
        self.dao = dao

    def upload_photo(
        self, file_name: str | None, content_type: str | None, data: bytes
    ) -> UploadResult:
        name = file_name or DEFAULT_FILE_NAME
        try:
            mime_type = validate_upload(content_type, data)
        except UploadValidationError as exc:
            logger.info("Rejected upload %r: %s", name, exc.reason)
            return UploadResult(success=False, file_name=name, error_message=exc.reason)

        dimensions = extract_dimensions(data, mime_type)
        width, height = dimensions if dimensions else (None, None)

        photo = self.dao.save(
            Photo(
                original_file_name=name,
                stored_file_name=stored_name_for(name),
                file_size=len(data),
                mime_type=mime_type,
                width=width,
                height=height,
                photo_data=data,
            )
        )
        logger.info(
            "Uploaded photo %s (%s, %d bytes, %sx%s)",
            photo.id,
            name,
            photo.file_size,
            width,
            height,
        )
        return UploadResult(success=True, file_name=name, photo_id=photo.id)

    def upload_photos(
        self, files: Iterable[tuple[str | None, str | None, bytes]]
    ) -> BatchUploadResult:
        """Process each file on its own; some may succeed while others fail."""
        batch = BatchUploadResult()
        for file_name, content_type, data in files:
            result = self.upload_photo(file_name, content_type, data)
            if result.success:
                batch.uploaded.append(result)
            else:
                batch.failed.append(result)
        return batch

    def get_all_photos(self) -> Sequence[Photo]:
        return self.dao.list_all()

    def get_page(self, limit: int, offset: int) -> Sequence[Photo]:
        return self.dao.find_page(limit=limit, offset=offset)

    def count_photos(self) -> int:
        return self.dao.count()

    def get_photo_by_id(self, photo_id: str) -> Photo | None:
        return self.dao.get(photo_id)

    def get_previous_photo(self, photo: Photo) -> Photo | None:
        # previous = next-older
        return self.dao.find_before(photo.uploaded_at, photo.id)

    def get_next_photo(self, photo: Photo) -> Photo | None:
        return self.dao.find_after(photo.uploaded_at, photo.id)

    def delete_photo(self, photo_id: str) -> bool:
        deleted = self.dao.delete(photo_id)
        if deleted:
            logger.info("Deleted photo %s", photo_id)
        else:
            logger.info("Delete requested for unknown photo %s", photo_id)
        return deleted
