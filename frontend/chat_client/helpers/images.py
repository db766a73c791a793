import io

from PIL import Image, UnidentifiedImageError

MAX_SIDE = 1024
JPEG_QUALITY = 70


class ImageCompressionError(ValueError):
    pass


def compress_image(data: bytes, max_side: int = MAX_SIDE, quality: int = JPEG_QUALITY) -> bytes:
    """Downscale so the longest side is at most `max_side` and re-encode as JPEG."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageCompressionError(f"Unsupported image file: {e}") from e

    image.thumbnail((max_side, max_side))
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
