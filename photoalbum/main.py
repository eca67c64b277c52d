import logging
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from photoalbum.database import Base, engine
from photoalbum.routers.gallery import router as gallery_router
from photoalbum.routers.photos import router as photos_router
from photoalbum.routers.upload import router as upload_router

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(), format=LOG_FORMAT)
logger = logging.getLogger(__name__)


class StorageErrorMiddleware(BaseHTTPMiddleware):
    """Turn database failures that escape a route into HTTP 500 responses.
    Validation and not-found outcomes are handled by the routes themselves;
    only storage-layer errors reach this point. They are logged and not
    retried."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except SQLAlchemyError:
            logger.exception("Storage error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Storage error"},
            )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Ensure database tables exist
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Photo Album", lifespan=lifespan)

app.add_middleware(StorageErrorMiddleware)

app.include_router(gallery_router)
app.include_router(upload_router)
app.include_router(photos_router)
