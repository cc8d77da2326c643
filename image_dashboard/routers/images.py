from fastapi import APIRouter, Depends, UploadFile, File, Query
from typing import Optional
from io import BytesIO
import logging

from image_dashboard.storage.s3 import S3Service
from image_dashboard.dependencies.dependencies import get_s3_service
from image_dashboard.image_service.service import save_image, fetch_images, remove_image
from image_dashboard.image_service.models import UploadResponse, ListImagesResponse, DeleteResponse
from image_dashboard.exceptions import NoFileProvidedException

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/images",
    tags=["images"]
)

@router.post("", response_model=UploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    s3: S3Service = Depends(get_s3_service)
):
    """Stores the uploaded file under a new unique key."""
    if image is None or not image.filename:
        raise NoFileProvidedException()

    contents = await image.read()
    stored = save_image(
        s3=s3,
        fileobj=BytesIO(contents),
        filename=image.filename,
        content_type=image.content_type,
        size=len(contents),
    )
    return UploadResponse(name=stored.name, url=stored.url)

@router.get("", response_model=ListImagesResponse)
def list_images_handler(
    s3: S3Service = Depends(get_s3_service)
):
    """Lists every image in the bucket."""
    images = fetch_images(s3)
    return ListImagesResponse(data=images, results=len(images))

@router.delete("", response_model=DeleteResponse)
def delete_image(
    key: Optional[str] = Query(None),
    s3: S3Service = Depends(get_s3_service)
):
    """Deletes an image by its storage key."""
    removed = remove_image(s3, key)
    return DeleteResponse(message=f"Image {removed} deleted")
