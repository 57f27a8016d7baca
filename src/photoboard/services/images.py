"""Client-side image downscaling into data URLs."""

import base64
import io

from PIL import Image

MAX_WIDTH = 800
MAX_HEIGHT = 600
JPEG_QUALITY = 60


def compress_image(image_bytes: bytes) -> str:
    """Downscale an image and re-encode it as a JPEG data URL.

    Landscape images are bounded by width, portrait and square ones by height.
    """
    with Image.open(io.BytesIO(image_bytes)) as image:
        width, height = _fit_size(image.width, image.height)
        resized = image.convert("RGB")
        if (width, height) != resized.size:
            resized = resized.resize((width, height), Image.LANCZOS)
        buffer = io.BytesIO()
        resized.save(buffer, "JPEG", quality=JPEG_QUALITY, optimize=True)
    return to_data_url(buffer.getvalue())


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _fit_size(width: int, height: int) -> tuple[int, int]:
    if width > height:
        if width > MAX_WIDTH:
            return MAX_WIDTH, max(1, round(height * MAX_WIDTH / width))
    elif height > MAX_HEIGHT:
        return max(1, round(width * MAX_HEIGHT / height)), MAX_HEIGHT
    return width, height


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
