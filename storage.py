# storage.py
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import UploadFile

from config import settings
from core.errors import ValidationFailure

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".pdf", ".doc", ".docx"}
ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

# upload field -> sub-directory of the upload root
FOLDERS = {
    "book_images": "books",
    "pyq_file": "pyqs",
    "blog_image": "profiles",
    "avatar": "profiles",
}

MAX_BOOK_IMAGES = 5


def is_present(upload: Optional[UploadFile]) -> bool:
    # browsers send an empty part when a file input is left blank
    return upload is not None and bool(upload.filename)


def check_file_type(upload: UploadFile) -> None:
    ext = os.path.splitext(upload.filename)[1].lower()
    mime = (upload.content_type or "").lower()
    if ext not in ALLOWED_EXTENSIONS or mime not in ALLOWED_MIME_TYPES:
        raise ValidationFailure(
            "Images and documents only!",
            [f"{upload.filename}: allowed types are {', '.join(sorted(ALLOWED_EXTENSIONS))}"],
        )


def read_checked(upload: UploadFile) -> bytes:
    check_file_type(upload)
    content = upload.file.read()
    if len(content) > settings.max_upload_bytes:
        raise ValidationFailure(
            "File too large",
            [f"{upload.filename}: max size is {settings.max_upload_bytes} bytes"],
        )
    return content


def write_file(content: bytes, filename: str, field: str) -> str:
    folder = os.path.join(settings.upload_dir, FOLDERS[field])
    os.makedirs(folder, exist_ok=True)

    ext = os.path.splitext(filename)[1].lower()
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    final_name = f"{field}-{stamp}-{uuid.uuid4().hex[:8]}{ext}"
    file_path = os.path.join(folder, final_name)

    with open(file_path, "wb") as out_file:
        out_file.write(content)

    logger.info("Stored upload %s (%d bytes)", file_path, len(content))
    return file_path.replace(os.sep, "/")


def save_upload(upload: UploadFile, field: str) -> str:
    """Validate and write one upload, returning the stored path."""
    content = read_checked(upload)
    return write_file(content, upload.filename, field)


def save_uploads(uploads: Optional[List[UploadFile]], field: str) -> List[str]:
    files = [u for u in (uploads or []) if is_present(u)]
    if field == "book_images" and len(files) > MAX_BOOK_IMAGES:
        raise ValidationFailure(f"At most {MAX_BOOK_IMAGES} images per book")
    # nothing is written unless every file passes the checks
    checked = [(read_checked(upload), upload.filename) for upload in files]
    return [write_file(content, filename, field) for content, filename in checked]
