from typing import List, Optional
import logging
import uuid
from botocore.exceptions import BotoCoreError, ClientError

from image_dashboard.storage.s3 import S3Service
from image_dashboard.image_service.models import ImageItem, StoredObject
from image_dashboard.exceptions import (
    MissingKeyException,
    S3DeleteException,
    S3ListException,
    S3UploadException,
)

log = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".svg")
DEFAULT_CONTENT_TYPE = "application/octet-stream"

def image_id_key() -> str:
    """Generates a new unique image ID key."""
    return str(uuid.uuid4())

def storage_key_for(filename: str) -> str:
    """
        Builds a fresh storage key from a random uuid and the original
        file extension, with the extension's case preserved.
        A filename without an extension yields the bare uuid.
    """
    _, dot, ext = filename.rpartition(".")
    if not dot or not ext:
        return image_id_key()
    return f"{image_id_key()}.{ext}"

def is_image_key(key: Optional[str]) -> bool:
    """Matches the key against the image extension allow-list, ignoring case."""
    return bool(key) and key.lower().endswith(IMAGE_EXTENSIONS)

def save_image(
    s3: S3Service,
    fileobj,
    filename: str,
    content_type: Optional[str],
    size: int,
) -> StoredObject:
    """Uploads the file under a new unique key."""
    key = storage_key_for(filename)
    try:
        s3.upload(
            fileobj=fileobj,
            key=key,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            content_length=size,
        )
    except (BotoCoreError, ClientError) as e:
        log.error("S3 upload of %s failed: %s", filename, e)
        raise S3UploadException()

    log.info("Stored %s as %s (%d bytes)", filename, key, size)
    return StoredObject(name=key, size=size, url=s3.public_url(key))

def fetch_images(s3: S3Service) -> List[ImageItem]:
    """Lists every image object in the bucket; non-image keys are skipped."""
    try:
        return [
            ImageItem(
                id=obj["Key"],
                name=obj["Key"],
                size=int(obj.get("Size", 0)),
                url=s3.public_url(obj["Key"]),
                last_modified=obj.get("LastModified"),
            )
            for obj in s3.list_objects()
            if is_image_key(obj.get("Key"))
        ]
    except (BotoCoreError, ClientError) as e:
        log.error("S3 list_objects failed: %s", e)
        raise S3ListException()

def remove_image(s3: S3Service, key: Optional[str]) -> str:
    """
        Deletes the object stored under `key`.
        S3 deletes are idempotent, so a key that does not exist still succeeds.
    """
    if not key:
        raise MissingKeyException()
    try:
        s3.delete(key)
    except (BotoCoreError, ClientError) as e:
        log.error("S3 delete of %s failed: %s", key, e)
        raise S3DeleteException()
    log.info("Deleted image %s", key)
    return key
