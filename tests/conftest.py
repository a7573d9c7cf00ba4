import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from upload_service.builder import UploadConfigBuilder
from upload_service.dependencies.upload import get_upload_service
from upload_service.main import app
from upload_service.service import UploadService
from tests.constants import JPEG_FILE_TYPE, PDF_FILE_TYPE, PNG_FILE_TYPE


def make_image(image_format: str = "PNG", size: tuple[int, int] = (400, 200), mode: str = "RGB") -> bytes:
    """Render a solid-colour image and return its encoded bytes."""
    image = Image.new(mode, size, "red")
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image("JPEG")


@pytest.fixture
def local_builder(tmp_path) -> UploadConfigBuilder:
    """Builder with local storage in a temporary directory and PNG/JPEG/PDF types."""
    return (
        UploadConfigBuilder()
        .use_local_storage(str(tmp_path))
        .set_file_type("image/png", PNG_FILE_TYPE)
        .set_file_type("image/jpeg", JPEG_FILE_TYPE)
        .set_file_type("pdf", PDF_FILE_TYPE)
    )


@pytest.fixture
def client(local_builder):
    """Test client with the upload service bound to local temporary storage."""
    service = UploadService(local_builder.build())

    def override_get_upload_service():
        return service

    app.dependency_overrides[get_upload_service] = override_get_upload_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
