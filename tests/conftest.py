# pyright: reportUnknownVariableType=false
# pyright: reportUnknownMemberType=false
import logging
from collections.abc import Callable, Generator
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from photoalbum.dao import PhotoDAO
from photoalbum.database import Base
from photoalbum.deps import get_db
from photoalbum.main import app
from photoalbum.service import PhotoService

# Configure basic logging for tests
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ImageFactory = Callable[..., bytes]


# Database Fixture (Overrides get_db dependency)
@pytest.fixture
def session() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def dao(session: Session) -> PhotoDAO:
    return PhotoDAO(session)


@pytest.fixture
def service(dao: PhotoDAO) -> PhotoService:
    return PhotoService(dao)


@pytest.fixture
def client(session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_image() -> ImageFactory:
    """Return a factory that renders a small solid-colour image to bytes."""

    def _make(
        pil_format: str = "PNG", size: tuple[int, int] = (1, 1), mode: str = "RGB"
    ) -> bytes:
        buffer = BytesIO()
        Image.new(mode, size, color=0).save(buffer, format=pil_format)
        return buffer.getvalue()

    return _make


@pytest.fixture
def png_bytes(make_image: ImageFactory) -> bytes:
    return make_image("PNG", (1, 1))
