import logging
import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from photoalbum.models import Photo, stored_name_for, utc_now

logger = logging.getLogger(__name__)

# Newest first; id breaks ties between identical timestamps
NEWEST_FIRST = (Photo.uploaded_at.desc(), Photo.id.desc())
OLDEST_FIRST = (Photo.uploaded_at.asc(), Photo.id.asc())


class PhotoDAO:
    """Data Access Object for Photo.

    The only writer of ``photos`` rows. Not-found lookups return ``None`` or
    ``False``; database errors propagate to the caller.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, photo_id: str) -> Photo | None:
        return self.db.get(Photo, photo_id)

    def list_all(self) -> Sequence[Photo]:
        return self.db.scalars(select(Photo).order_by(*NEWEST_FIRST)).all()

    def find_page(self, limit: int = 100, offset: int = 0) -> Sequence[Photo]:
        stmt = select(Photo).order_by(*NEWEST_FIRST).offset(offset).limit(limit)
        return self.db.scalars(stmt).all()

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Photo)) or 0

    def find_before(
        self, uploaded_at: datetime, photo_id: str | None = None
    ) -> Photo | None:
        """
        Return the next-older photo relative to ``uploaded_at``.

        When ``photo_id`` is given, photos sharing the same timestamp are
        ordered by id so that navigation stays deterministic.
        """
        if photo_id is None:
            condition = Photo.uploaded_at < uploaded_at
        else:
            condition = or_(
                Photo.uploaded_at < uploaded_at,
                and_(Photo.uploaded_at == uploaded_at, Photo.id < photo_id),
            )
        stmt = select(Photo).where(condition).order_by(*NEWEST_FIRST).limit(1)
        return self.db.scalars(stmt).first()

    def find_after(
        self, uploaded_at: datetime, photo_id: str | None = None
    ) -> Photo | None:
        """
        Return the next-newer photo relative to ``uploaded_at``.
        """
        if photo_id is None:
            condition = Photo.uploaded_at > uploaded_at
        else:
            condition = or_(
                Photo.uploaded_at > uploaded_at,
                and_(Photo.uploaded_at == uploaded_at, Photo.id > photo_id),
            )
        stmt = select(Photo).where(condition).order_by(*OLDEST_FIRST).limit(1)
        return self.db.scalars(stmt).first()

    def save(self, photo: Photo) -> Photo:
        if not photo.id:
            photo.id = str(uuid.uuid4())
        if photo.uploaded_at is None:
            photo.uploaded_at = utc_now()
        # file_size always describes the stored blob
        if photo.photo_data is not None:
            photo.file_size = len(photo.photo_data)
        self.db.add(photo)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(photo)
        logger.debug("Saved photo %s (%d bytes)", photo.id, photo.file_size)
        return photo

    def create(  # noqa: PLR0913
        self,
        original_file_name: str,
        photo_data: bytes,
        mime_type: str,
        stored_file_name: str | None = None,
        width: int | None = None,
        height: int | None = None,
        uploaded_at: datetime | None = None,
    ) -> Photo:
        photo = Photo(
            original_file_name=original_file_name,
            stored_file_name=stored_file_name or stored_name_for(original_file_name),
            file_size=len(photo_data),
            mime_type=mime_type,
            width=width,
            height=height,
            uploaded_at=uploaded_at,
            photo_data=photo_data,
        )
        return self.save(photo)

    def delete(self, photo_id: str) -> bool:
        photo = self.get(photo_id)
        if photo is None:
            return False
        self.db.delete(photo)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return True
