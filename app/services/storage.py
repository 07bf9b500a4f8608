"""
Profile picture storage on local disk, served back through the /uploads mount.
"""

import logging
import os
from uuid import uuid4

from fastapi import UploadFile

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class UnsupportedUpload(Exception):
    pass


async def save_profile_picture(upload: UploadFile, upload_dir: str, public_base_url: str) -> str:
    extension = ALLOWED_IMAGE_TYPES.get(upload.content_type)
    if not extension:
        raise UnsupportedUpload(f"Unsupported file type: {upload.content_type}")

    content = await upload.read()
    if not content:
        raise UnsupportedUpload("Uploaded file is empty")
    if len(content) > MAX_UPLOAD_BYTES:
        raise UnsupportedUpload("Uploaded file is too large")

    os.makedirs(upload_dir, exist_ok=True)
    filename = f"{uuid4().hex}{extension}"
    with open(os.path.join(upload_dir, filename), "wb") as f:
        f.write(content)

    logger.info("Stored profile picture %s (%d bytes)", filename, len(content))
    return f"{public_base_url.rstrip('/')}/uploads/{filename}"
