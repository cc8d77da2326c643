import io
import re
from datetime import datetime, timezone
import pytest
from botocore.exceptions import ClientError

from image_dashboard.image_service import service
from image_dashboard.exceptions import (
    MissingKeyException,
    S3DeleteException,
    S3ListException,
    S3UploadException,
)


def boom(operation="Op"):
    return ClientError({"Error": {"Code": "500", "Message": "boom"}}, operation)


def fake_s3(mocker):
    s3 = mocker.Mock()
    s3.public_url.side_effect = lambda key: f"https://bucket.example/{key}"
    return s3


# ------------------------------
# storage_key_for / is_image_key
# ------------------------------

def test_storage_key_keeps_extension_case():
    key = service.storage_key_for("cat.PNG")
    assert re.match(r"^[0-9a-f-]{36}\.PNG$", key)


def test_storage_key_uses_last_extension():
    assert service.storage_key_for("archive.tar.gz").endswith(".gz")


@pytest.mark.parametrize("filename", ["README", "trailing."])
def test_storage_key_without_extension_has_no_dangling_dot(filename):
    key = service.storage_key_for(filename)
    assert re.match(r"^[0-9a-f-]{36}$", key)


def test_storage_keys_are_unique():
    assert service.storage_key_for("a.png") != service.storage_key_for("a.png")


@pytest.mark.parametrize("key", ["a.jpg", "b.JPEG", "c.Png", "d.gif", "e.bmp", "f.webp", "g.SVG"])
def test_is_image_key_accepts_allow_list(key):
    assert service.is_image_key(key)


@pytest.mark.parametrize("key", ["notes.txt", "png", "photo.png.bak", "", None])
def test_is_image_key_rejects_others(key):
    assert not service.is_image_key(key)


# ------------------------------
# save_image
# ------------------------------

def test_save_image_success(mocker):
    s3 = fake_s3(mocker)
    fileobj = io.BytesIO(b"12345")

    stored = service.save_image(s3, fileobj, "test.png", "image/png", 5)

    assert stored.name.endswith(".png")
    assert stored.size == 5
    assert stored.url == f"https://bucket.example/{stored.name}"
    s3.upload.assert_called_once_with(
        fileobj=fileobj, key=stored.name, content_type="image/png", content_length=5
    )


def test_save_image_defaults_content_type(mocker):
    s3 = fake_s3(mocker)
    service.save_image(s3, io.BytesIO(b"x"), "x.png", None, 1)
    assert s3.upload.call_args.kwargs["content_type"] == "application/octet-stream"


def test_save_image_s3_error(mocker):
    s3 = fake_s3(mocker)
    s3.upload.side_effect = boom("PutObject")

    with pytest.raises(S3UploadException) as excinfo:
        service.save_image(s3, io.BytesIO(b"x"), "f.png", "image/png", 1)
    assert excinfo.value.status_code == 500
    assert "boom" not in excinfo.value.detail


# ------------------------------
# fetch_images
# ------------------------------

def test_fetch_images_filters_and_maps(mocker):
    s3 = fake_s3(mocker)
    modified = datetime(2024, 5, 1, tzinfo=timezone.utc)
    s3.list_objects.return_value = iter([
        {"Key": "a.png", "Size": 10, "LastModified": modified},
        {"Key": "b.txt", "Size": 3, "LastModified": modified},
        {"Key": "c.JPG", "Size": 7, "LastModified": modified},
    ])

    images = service.fetch_images(s3)

    assert [i.name for i in images] == ["a.png", "c.JPG"]
    assert images[0].id == "a.png"
    assert images[0].size == 10
    assert images[0].url == "https://bucket.example/a.png"
    assert images[0].last_modified == modified


def test_fetch_images_empty(mocker):
    s3 = fake_s3(mocker)
    s3.list_objects.return_value = iter([])
    assert service.fetch_images(s3) == []


def test_fetch_images_s3_error(mocker):
    s3 = fake_s3(mocker)
    s3.list_objects.side_effect = boom("ListObjectsV2")
    with pytest.raises(S3ListException):
        service.fetch_images(s3)


# ------------------------------
# remove_image
# ------------------------------

def test_remove_image_success(mocker):
    s3 = fake_s3(mocker)
    assert service.remove_image(s3, "k.png") == "k.png"
    s3.delete.assert_called_once_with("k.png")


@pytest.mark.parametrize("key", [None, ""])
def test_remove_image_requires_key(mocker, key):
    s3 = fake_s3(mocker)
    with pytest.raises(MissingKeyException):
        service.remove_image(s3, key)
    s3.delete.assert_not_called()


def test_remove_image_s3_error(mocker):
    s3 = fake_s3(mocker)
    s3.delete.side_effect = boom("DeleteObject")
    with pytest.raises(S3DeleteException):
        service.remove_image(s3, "k.png")
