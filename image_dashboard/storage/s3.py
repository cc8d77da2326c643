import boto3
from typing import Any, Dict, Iterator
from urllib.parse import quote
from botocore.exceptions import ClientError
from image_dashboard.settings import Settings
import logging

log = logging.getLogger(__name__)

# -------------------------
# S3 Service
# -------------------------
class S3Service:
    """
        Single configured S3 connection, created once at startup and
        shared by every request through app.state.
    """
    def __init__(self, settings: Settings):
        self.bucket = settings.s3_bucket
        self.region = settings.aws_region
        self.public_base_url = settings.public_base_url

        session = boto3.session.Session(region_name=settings.aws_region)
        kwargs = {}
        if settings.aws_access_key_id and settings.aws_secret_access_key:
            kwargs["aws_access_key_id"] = settings.aws_access_key_id
            kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
        if settings.aws_endpoint_url:
            kwargs["endpoint_url"] = settings.aws_endpoint_url

        self.client = session.client("s3", **kwargs)
        log.info("Initialized S3 client for bucket %s", self.bucket)

        if settings.create_bucket:
            self.ensure_bucket()

    def ensure_bucket(self):
        try:
            self.client.head_bucket(Bucket=self.bucket)
            log.debug("Bucket %s already exists", self.bucket)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code in ("404", "NoSuchBucket"):
                kwargs = {"Bucket": self.bucket}
                # us-east-1 rejects an explicit LocationConstraint
                if self.region != "us-east-1":
                    kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
                self.client.create_bucket(**kwargs)
                log.info("Created bucket %s", self.bucket)
            else:
                log.error("Failed to check/create bucket: %s", e)
                raise

    def upload(self, fileobj, key: str, content_type: str, content_length: int):
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=fileobj,
            ContentType=content_type,
            ContentLength=content_length,
        )
        log.debug("Uploaded %s (%d bytes) to s3://%s/%s", key, content_length, self.bucket, key)

    def list_objects(self) -> Iterator[Dict[str, Any]]:
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket):
            for obj in page.get("Contents", []):
                yield obj

    def delete(self, key: str):
        self.client.delete_object(Bucket=self.bucket, Key=key)
        log.debug("Deleted s3://%s/%s", self.bucket, key)

    def public_url(self, key: str) -> str:
        path = quote(key, safe="/")
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{path}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{path}"

    def close(self):
        self.client.close()
        log.info("Closed S3 client")
