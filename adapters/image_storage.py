"""Local storage for analyzed meal photos.
"""

from pathlib import Path
from typing import Optional
import base64
import binascii
import logging
import uuid

from app.config import settings

logger = logging.getLogger("mealscan.images")

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def split_data_url(image_data: str) -> tuple[str, str]:
    """Return (mime_type, base64_payload) for a data URL or raw base64 string."""
    if image_data.startswith("data:") and "," in image_data:
        header, payload = image_data.split(",", 1)
        mime = header[5:].split(";", 1)[0] or "image/jpeg"
        return mime, payload
    return "image/jpeg", image_data


def ensure_media_dir() -> Path:
    path = Path(settings.media_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_image(image_data: str, user_id: Optional[str] = None) -> str:
    """Store a base64 image and return its public URL.

    Any decode or write failure falls back to the placeholder URL.
    """
    mime, payload = split_data_url(image_data)
    ext = _EXTENSIONS.get(mime, "jpg")
    name = f"{user_id or 'anonymous'}-{uuid.uuid4().hex}.{ext}"
    try:
        raw = base64.b64decode(payload, validate=True)
        (ensure_media_dir() / name).write_bytes(raw)
    except (binascii.Error, ValueError, OSError) as exc:
        logger.warning(f"image_store_failed user_id={user_id} error={exc}")
        return settings.placeholder_image_url
    logger.info(f"image_stored user_id={user_id} name={name} bytes={len(raw)}")
    return f"{settings.media_url_prefix.rstrip('/')}/{name}"
