"""Product photo payload rules."""

import base64
import binascii

from protean.exceptions import ValidationError

MAX_PHOTO_BYTES = 1024 * 1024
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


def validate_photo(data: bytes, content_type: str) -> None:
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError({"photo": ["Only JPEG, PNG, or WebP images are allowed"]})
    if not data:
        raise ValidationError({"photo": ["Photo is empty"]})
    if len(data) > MAX_PHOTO_BYTES:
        raise ValidationError({"photo": ["Photo size must not exceed 1MB"]})


def decode_photo(encoded: str, content_type: str) -> bytes:
    """Decode a base64 photo payload and check it against the upload rules."""
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError({"photo": ["Photo must be base64 encoded"]}) from None

    validate_photo(data, content_type)
    return data
