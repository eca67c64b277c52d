import uuid
from datetime import UTC, datetime
from pathlib import PurePath

from sqlalchemy import BigInteger, DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from photoalbum.database import Base


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def stored_name_for(original_file_name: str) -> str:
    """Generate a unique record label that keeps the original extension."""
    suffix = PurePath(original_file_name).suffix.lower()
    return f"{uuid.uuid4()}{suffix}"


class Photo(Base):
    __tablename__ = "photos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    original_file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    stored_file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Kept for schema compatibility; blobs live in photo_data
    file_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    photo_data: Mapped[bytes] = mapped_column(
        LargeBinary, nullable=False, deferred=True
    )

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, original_file_name={self.original_file_name})>"
