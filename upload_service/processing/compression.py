"""
Image compression stage.

Decodes an image with Pillow, optionally shrinks or grows it to fit inside
the configured bounding box (aspect ratio preserved), and re-encodes it.
The quality setting only applies to JPEG images; other formats are
re-encoded in their own format with codec defaults.
"""
import io

from PIL import Image

from upload_service.exceptions import CompressionError
from upload_service.logging_config import setup_logging
from upload_service.policy import CompressionConfig, CompressionOptions

logger = setup_logging()


def fit_inside(
    width: int,
    height: int,
    max_width: int | None,
    max_height: int | None,
) -> tuple[int, int]:
    """
    Compute the largest size that fits inside `max_width` x `max_height`.

    A missing bound does not constrain its dimension. The result is scaled
    up as well as down, and neither dimension drops below 1 pixel.
    """
    scales = []
    if max_width:
        scales.append(max_width / width)
    if max_height:
        scales.append(max_height / height)

    if not scales:
        return width, height

    scale = min(scales)
    return max(1, round(width * scale)), max(1, round(height * scale))


def compress_image(content: bytes, compression: CompressionConfig) -> bytes:
    """
    Resize and re-encode image bytes according to the compression policy.

    Args:
        content: Raw image bytes
        compression: Compression policy block (must be enabled)

    Returns:
        The re-encoded image bytes

    Raises:
        CompressionError: If the image cannot be decoded or encoded
    """
    options = compression.config or CompressionOptions()

    try:
        with Image.open(io.BytesIO(content)) as image:
            image_format = image.format or "PNG"
            processed = image

            if options.max_width or options.max_height:
                target_size = fit_inside(
                    image.width,
                    image.height,
                    options.max_width,
                    options.max_height,
                )
                processed = image.resize(target_size, Image.Resampling.LANCZOS)

            save_kwargs = {"format": image_format}
            if options.quality and image_format == "JPEG":
                save_kwargs["quality"] = options.quality
                # JPEG has no alpha channel
                if processed.mode not in ("RGB", "L", "CMYK"):
                    processed = processed.convert("RGB")

            output = io.BytesIO()
            processed.save(output, **save_kwargs)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning(f"Image compression failed: {str(e)}")
        raise CompressionError(f"Image compression failed: {str(e)}") from e

    compressed = output.getvalue()
    logger.debug(
        f"Compressed {image_format} image from {len(content)} to {len(compressed)} bytes"
    )
    return compressed
