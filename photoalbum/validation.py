"""
Upload validation: MIME allow-list, size ceiling and empty-file rejection.
"""

ALLOWED_MIME_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB

EMPTY_FILE_MESSAGE = "File is empty"
UNSUPPORTED_TYPE_MESSAGE = (
    "File type not supported. Please upload JPEG, PNG, GIF, or WebP images."
)
TOO_LARGE_MESSAGE = "File size exceeds maximum allowed size of 10MB"


class UploadValidationError(ValueError):
    """Raised when an upload is rejected before it reaches storage."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def normalize_mime_type(content_type: str | None) -> str | None:
    """
    Strip parameters and case from a Content-Type value.

    Returns None when the value is missing or not of the form ``type/subtype``.
    """
    if not content_type:
        return None
    mime = content_type.split(";", 1)[0].strip().lower()
    if mime.count("/") != 1 or mime.startswith("/") or mime.endswith("/"):
        return None
    return mime


def validate_upload(content_type: str | None, data: bytes) -> str:
    """
    Check an upload against the allow-list and size limits.

    Returns the normalized MIME type. Raises UploadValidationError with a
    human-readable reason for the first failing check.
    """
    if len(data) == 0:
        raise UploadValidationError(EMPTY_FILE_MESSAGE)
    mime_type = normalize_mime_type(content_type)
    if mime_type not in ALLOWED_MIME_TYPES:
        raise UploadValidationError(UNSUPPORTED_TYPE_MESSAGE)
    if len(data) > MAX_FILE_SIZE:
        raise UploadValidationError(TOO_LARGE_MESSAGE)
    return mime_type
