from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from photoalbum.dao import PhotoDAO
from photoalbum.database import SessionLocal
from photoalbum.service import PhotoService


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed once the response is sent."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_photo_service(db: Annotated[Session, Depends(get_db)]) -> PhotoService:
    """Build the upload/navigation service around the request's session."""
    return PhotoService(PhotoDAO(db))
