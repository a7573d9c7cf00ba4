"""
Tests for the upload API endpoint.

Covers the success envelope and the mapping of pipeline errors to HTTP
status codes.
"""
import os
from unittest.mock import patch

from upload_service.dependencies.upload import get_upload_service
from upload_service.main import app
from upload_service.service import UploadService
from tests.constants import URLs

CLAMD_CLIENT = "upload_service.processing.scanning.clamd.ClamdNetworkSocket"


def _override(service: UploadService) -> None:
    app.dependency_overrides[get_upload_service] = lambda: service


def test_upload_png_success(client, png_bytes, tmp_path):
    response = client.post(URLs.UPLOADS, files={"file": ("a.png", png_bytes, "image/png")})

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["data"]["url"] == os.path.join(str(tmp_path), "a.png")
    assert data["data"]["filename"] == "a.png"
    assert data["data"]["content_type"] == "image/png"
    assert data["data"]["size"] == len(png_bytes)
    assert (tmp_path / "a.png").read_bytes() == png_bytes


def test_upload_unsupported_type(client):
    response = client.post(URLs.UPLOADS, files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "Bad Request"
    assert "Unsupported file type" in data["message"]


def test_upload_invalid_extension(client, png_bytes):
    response = client.post(URLs.UPLOADS, files={"file": ("a.gif", png_bytes, "image/png")})

    assert response.status_code == 400
    assert "Invalid file extension: .gif" in response.json()["message"]


def test_upload_too_large(client, tmp_path):
    response = client.post(
        URLs.UPLOADS,
        files={"file": ("a.png", b"\x00" * (2 * 1024 * 1024), "image/png")},
    )

    assert response.status_code == 413
    assert "1 MB" in response.json()["message"]
    assert not (tmp_path / "a.png").exists()


def test_upload_infected(client, local_builder, png_bytes, tmp_path):
    _override(UploadService(local_builder.enable_virus_scanning("clamav", 3310).build()))

    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {"stream": ("FOUND", "Eicar-Test-Signature")}
        response = client.post(URLs.UPLOADS, files={"file": ("a.png", png_bytes, "image/png")})

    assert response.status_code == 422
    assert response.json()["message"] == "File is infected"
    assert not (tmp_path / "a.png").exists()


def test_upload_scanner_unavailable(client, local_builder, png_bytes):
    _override(UploadService(local_builder.enable_virus_scanning("clamav", 3310).build()))

    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.side_effect = ConnectionRefusedError("refused")
        response = client.post(URLs.UPLOADS, files={"file": ("a.png", png_bytes, "image/png")})

    assert response.status_code == 502
    # Internal details are not exposed to the client
    assert response.json()["message"] == "Virus scan failed"


def test_upload_storage_failure(client, local_builder, png_bytes, tmp_path):
    local_builder.use_local_storage(str(tmp_path / "missing"))
    _override(UploadService(local_builder.build()))

    response = client.post(URLs.UPLOADS, files={"file": ("a.png", png_bytes, "image/png")})

    assert response.status_code == 502
    data = response.json()
    assert data["error"] == "Bad Gateway"
    assert "missing" not in data["message"]


def test_upload_corrupt_image_with_compression(client, local_builder):
    _override(UploadService(local_builder.enable_compression(quality=80).build()))

    response = client.post(URLs.UPLOADS, files={"file": ("a.png", b"broken", "image/png")})

    assert response.status_code == 422
    assert response.json()["message"] == "Image could not be processed"


def test_upload_compressed_size_reported(client, local_builder, png_bytes):
    _override(UploadService(local_builder.enable_compression(max_width=40).build()))

    response = client.post(URLs.UPLOADS, files={"file": ("a.png", png_bytes, "image/png")})

    assert response.status_code == 201
    assert response.json()["data"]["size"] != len(png_bytes)


def test_upload_requires_file(client):
    response = client.post(URLs.UPLOADS)

    assert response.status_code == 422


def test_upload_scanner_hangs_up_without_verdict(client, local_builder, png_bytes, tmp_path):
    _override(UploadService(local_builder.enable_virus_scanning("clamav", 3310).build()))

    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = None
        response = client.post(URLs.UPLOADS, files={"file": ("a.png", png_bytes, "image/png")})

    assert response.status_code == 502
    assert response.json()["message"] == "Virus scan failed"
    assert not (tmp_path / "a.png").exists()


def test_upload_absolute_filename_stays_in_destination(client, png_bytes, tmp_path):
    escaped = tmp_path.parent / "escaped.png"

    response = client.post(URLs.UPLOADS, files={"file": (str(escaped), png_bytes, "image/png")})

    assert response.status_code != 201
    assert not escaped.exists()


def test_upload_leading_slash_filename(client, png_bytes, tmp_path):
    response = client.post(URLs.UPLOADS, files={"file": ("/a.png", png_bytes, "image/png")})

    assert response.status_code == 201
    assert response.json()["data"]["url"] == os.path.join(str(tmp_path), "a.png")
    assert (tmp_path / "a.png").read_bytes() == png_bytes
