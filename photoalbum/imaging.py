import logging
from io import BytesIO

from PIL import Image

from photoalbum.validation import normalize_mime_type

logger = logging.getLogger(__name__)

# Pillow decoder names for the accepted upload types
PIL_FORMATS: dict[str, str] = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/webp": "WEBP",
}


def extract_dimensions(
    data: bytes, mime_type: str | None = None
) -> tuple[int, int] | None:
    """
    Read pixel width and height from the image header.

    Image.open only parses the header, so pixel data is never decoded. Any
    failure yields None; dimensions are optional metadata.
    """
    if not data:
        return None
    pil_format = PIL_FORMATS.get(normalize_mime_type(mime_type) or "")
    formats = (pil_format,) if pil_format else None
    try:
        with Image.open(BytesIO(data), formats=formats) as img:
            width, height = img.size
    except Exception as exc:  # noqa: BLE001
        logger.debug("Could not read image dimensions (%s): %s", mime_type, exc)
        return None
    if width <= 0 or height <= 0:
        return None
    return width, height
