"""
Tests for CloudinaryMediaHost - unsigned image upload.

Uses respx to mock httpx calls and verifies:
- missing configuration fails before any network call
- the multipart body carries the preset, folder and file
- remote errors become MediaUploadError with the remote message
"""

import httpx
import pytest
import respx

from anime_collection.adapters.api.cloudinary_client import CloudinaryMediaHost
from anime_collection.core.exceptions import ConfigurationError, MediaUploadError
from anime_collection.core.ports.media_host import IMediaHost
from anime_collection.core.value_objects.catalog import ImageUpload
from tests.fixtures.cloudinary_responses import (
    UPLOAD_PRESET_ERROR_RESPONSE,
    UPLOAD_SUCCESS_RESPONSE,
    UPLOAD_URL,
)

COVER = ImageUpload("cover.jpg", "image/jpeg", b"\xff\xd8\xff fake jpeg")


@pytest.fixture
def host() -> CloudinaryMediaHost:
    return CloudinaryMediaHost(cloud_name="demo", upload_preset="unsigned", max_attempts=1)


class TestCloudinaryConfiguration:
    def test_implements_interface(self, host) -> None:
        assert isinstance(host, IMediaHost)

    def test_upload_url(self, host) -> None:
        assert host.upload_url == UPLOAD_URL

    @pytest.mark.parametrize(("cloud", "preset"), [(None, "unsigned"), ("demo", None), ("", "")])
    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_configuration_makes_no_request(self, cloud, preset) -> None:
        route = respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200))
        host = CloudinaryMediaHost(cloud_name=cloud, upload_preset=preset)

        assert not host.configured
        with pytest.raises(ConfigurationError):
            await host.upload(COVER)
        assert not route.called


class TestCloudinaryUpload:
    """Tests for CloudinaryMediaHost.upload()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_returns_secure_url(self, host) -> None:
        route = respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(200, json=UPLOAD_SUCCESS_RESPONSE)
        )

        url = await host.upload(COVER)

        assert url == UPLOAD_SUCCESS_RESPONSE["secure_url"]
        body = route.calls.last.request.content
        assert b'name="upload_preset"' in body
        assert b"unsigned" in body
        assert b'name="folder"' in body
        assert b'filename="cover.jpg"' in body
        await host.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_remote_error_message(self, host) -> None:
        respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(400, json=UPLOAD_PRESET_ERROR_RESPONSE)
        )
        with pytest.raises(MediaUploadError, match="Upload preset not found"):
            await host.upload(COVER)

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_without_json_body(self, host) -> None:
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(500, text="oops"))
        with pytest.raises(MediaUploadError, match="HTTP 500"):
            await host.upload(COVER)

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_secure_url(self, host) -> None:
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json={"public_id": "x"}))
        with pytest.raises(MediaUploadError, match="Upload failed"):
            await host.upload(COVER)

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error(self, host) -> None:
        respx.post(UPLOAD_URL).mock(side_effect=httpx.ConnectTimeout("timeout"))
        with pytest.raises(MediaUploadError, match="Failed to upload image"):
            await host.upload(COVER)

    @pytest.mark.asyncio
    @respx.mock
    async def test_busy_host(self, host) -> None:
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(429, headers={"Retry-After": "5"}))
        with pytest.raises(MediaUploadError, match="busy"):
            await host.upload(COVER)
