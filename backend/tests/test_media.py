"""
Cloudinary client against a mocked transport.
"""
import hashlib
import io
from urllib.parse import parse_qs

import httpx
import pytest

from yelpcamp.exceptions import InvalidImageError, MediaStoreError
from yelpcamp.media import CloudinaryMediaStore, ensure_image, sign


def _store(handler, api_key="key123", api_secret="secret456"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return CloudinaryMediaStore("demo", api_key, api_secret, client=client)


def test_sign_matches_cloudinary_algorithm():
    params = {"timestamp": 1315060510, "public_id": "sample_image"}
    expected = hashlib.sha1(b"public_id=sample_image&timestamp=1315060510abcd").hexdigest()
    assert sign(params, "abcd") == expected


def test_sign_skips_empty_values():
    assert sign({"timestamp": 1, "folder": ""}, "s") == sign({"timestamp": 1}, "s")


@pytest.mark.parametrize("filename", ["lake.jpg", "LAKE.JPEG", "a.png", "b.Gif"])
def test_ensure_image_accepts_images(filename):
    ensure_image(filename)


@pytest.mark.parametrize("filename", ["notes.txt", "lake.jpg.exe", "", None])
def test_ensure_image_rejects_others(filename):
    with pytest.raises(InvalidImageError):
        ensure_image(filename)


def test_upload_returns_asset_and_signs_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/abc.jpg",
            "public_id": "abc",
        })

    asset = _store(handler).upload(io.BytesIO(b"img-bytes"), "lake.jpg")

    assert asset.secure_url == "https://res.cloudinary.com/demo/image/upload/v1/abc.jpg"
    assert asset.public_id == "abc"
    request = seen[0]
    assert request.url == "https://api.cloudinary.com/v1_1/demo/image/upload"
    body = request.read()
    assert b'name="api_key"' in body and b"key123" in body
    assert b'name="signature"' in body
    assert b"img-bytes" in body
    assert b"secret456" not in body


def test_upload_error_carries_provider_message():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "Invalid image file"}})

    with pytest.raises(MediaStoreError, match="Invalid image file"):
        _store(handler).upload(io.BytesIO(b"x"), "lake.jpg")


def test_upload_network_failure_is_reported():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(MediaStoreError, match="unreachable"):
        _store(handler).upload(io.BytesIO(b"x"), "lake.jpg")


def test_missing_credentials_fail_before_request():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(MediaStoreError, match="credentials"):
        _store(handler, api_key=None).destroy("abc")


def test_destroy_posts_signed_public_id():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"result": "ok"})

    _store(handler).destroy("yelpcamp/abc")

    request = seen[0]
    assert request.url.path == "/v1_1/demo/image/destroy"
    form = {k: v[0] for k, v in parse_qs(request.read().decode()).items()}
    assert form["public_id"] == "yelpcamp/abc"
    assert form["api_key"] == "key123"
    expected = sign({"public_id": "yelpcamp/abc", "timestamp": form["timestamp"]}, "secret456")
    assert form["signature"] == expected


def test_destroy_tolerates_missing_asset():
    def handler(request):
        return httpx.Response(200, json={"result": "not found"})

    _store(handler).destroy("gone")


def test_destroy_unexpected_result_raises():
    def handler(request):
        return httpx.Response(200, json={"result": "error"})

    with pytest.raises(MediaStoreError):
        _store(handler).destroy("abc")
