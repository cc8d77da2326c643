from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class StoredObject(BaseModel):
    name: str
    size: int
    url: str
    last_modified: Optional[datetime] = None

class ImageItem(BaseModel):
    """
        One listed image. `id` is the storage key, so it stays the same
        across list calls and can key per-item UI state.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    size: int
    url: str
    last_modified: Optional[datetime] = Field(None, alias="lastModified")

class UploadResponse(BaseModel):
    status: Literal["success"] = "success"
    name: str
    url: str

class ListImagesResponse(BaseModel):
    status: Literal["success"] = "success"
    data: List[ImageItem]
    results: int

class DeleteResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str
