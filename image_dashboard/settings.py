from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from typing import List, Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # tolerate unknown vars if needed
        populate_by_name=True,
    )

    aws_region: str = "us-east-1"
    s3_bucket: str = Field(
        "image-dashboard-bucket",
        validation_alias=AliasChoices("S3_BUCKET", "AWS_S3_BUCKET_NAME"),
    )
    aws_endpoint_url: Optional[str] = None
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    # Base for object URLs when the bucket is not served from amazonaws.com
    public_base_url: Optional[str] = None
    create_bucket: bool = False

    app_title: str = "Image Dashboard"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Dashboard client
    gateway_url: str = "http://localhost:8000"
    request_timeout: float = 30.0
    page_size: int = Field(12, ge=1)
    notification_timeout: float = Field(5.0, gt=0)

settings = Settings()
