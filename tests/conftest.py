import io
import os
import pytest
from moto import mock_aws
from fastapi.testclient import TestClient
from PIL import Image
import boto3

# Dummy AWS credentials for moto, set BEFORE importing app modules
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["S3_BUCKET"] = "image-dashboard-bucket"
# Clear the AWS_ENDPOINT_URL so moto mocks are used instead of localstack
os.environ.pop("AWS_ENDPOINT_URL", None)

from image_dashboard.main import create_app
from image_dashboard.settings import Settings
from image_dashboard.storage.s3 import S3Service

BUCKET = "image-dashboard-bucket"


def make_png_bytes(color="red"):
    """Generate a simple valid PNG in-memory."""
    img = Image.new("RGB", (10, 10), color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def test_settings():
    return Settings(
        aws_region="us-east-1",
        s3_bucket=BUCKET,
        aws_endpoint_url=None,
        public_base_url=None,
        page_size=12,
        notification_timeout=5.0,
    )


@pytest.fixture(scope="function")
def s3_backend():
    """Raw boto3 client on a moto-backed bucket, for seeding and inspection."""
    with mock_aws():
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket=BUCKET)
        yield s3


@pytest.fixture(scope="function")
def s3_service(s3_backend, test_settings):
    # Create the service within the moto context
    return S3Service(test_settings)


@pytest.fixture(scope="function")
def test_client(s3_service, test_settings):
    app = create_app(settings=test_settings, s3=s3_service)
    with TestClient(app) as client:
        yield client
