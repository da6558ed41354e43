import base64
import binascii
import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import BLANK_CHARACTER, INVALID_IMAGE, ValidationError

ALLOWED_MEDIA_TYPES = {"image/jpeg", "image/png", "image/webp"}


@dataclass(frozen=True)
class ReferenceImage:
    """Immutable snapshot of an uploaded image: media type plus raw bytes."""

    media_type: str
    data: bytes


def require_character(text: str) -> str:
    character = (text or "").strip()
    if not character:
        raise ValidationError(BLANK_CHARACTER)
    return character


def load_reference_image(path: Path) -> ReferenceImage:
    """
    Read an image file from disk for use as a meme reference.

    The media type is taken from the decoded file contents, not the file
    extension, and must be one of `ALLOWED_MEDIA_TYPES`.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ValidationError(f"Could not read image file '{path}': {e}") from e
    return _snapshot(data)


def reference_image_from_data_uri(uri: str) -> ReferenceImage:
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValidationError(INVALID_IMAGE)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(INVALID_IMAGE) from e
    return _snapshot(data)


def _snapshot(data: bytes) -> ReferenceImage:
    try:
        with Image.open(io.BytesIO(data)) as img:
            media_type = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError(INVALID_IMAGE) from e

    if media_type not in ALLOWED_MEDIA_TYPES:
        raise ValidationError(INVALID_IMAGE)
    return ReferenceImage(media_type=media_type, data=data)
