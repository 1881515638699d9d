"""Image decoding, resizing and WebP encoding helpers built on Pillow."""

import io
from dataclasses import dataclass

from PIL import Image

WEBP_FORMAT = "WEBP"
WEBP_QUALITY = 82

# Modes the WebP encoder accepts without conversion.
_WEBP_MODES = ("RGB", "RGBA")


@dataclass(frozen=True)
class SourceImage:
    """Fetched source bytes together with the decoded image."""

    data: bytes
    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


def open_image(data: bytes) -> Image.Image:
    """
    Decode image bytes into a fully loaded Pillow image.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a supported image.
        OSError: If the image data is truncated or corrupt.
    """
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def variant_height(source_width: int, source_height: int, width: int) -> int:
    """
    Height of a ``width``-wide variant that keeps the source aspect ratio.

    Rounds to the nearest integer with halves rounded up, and never goes
    below one pixel.
    """
    return max(1, int(source_height * width / source_width + 0.5))


def to_webp_mode(image: Image.Image) -> Image.Image:
    """Convert ``image`` to RGB or RGBA, keeping transparency when present."""
    if image.mode in _WEBP_MODES:
        return image
    if image.mode in ("LA", "PA", "La") or "transparency" in image.info:
        return image.convert("RGBA")
    return image.convert("RGB")


def resize_to_width(image: Image.Image, width: int) -> Image.Image:
    """
    Fit ``image`` inside ``width`` pixels, preserving aspect ratio.

    Never enlarges: an image already at most ``width`` wide is returned at
    its own size.
    """
    if width >= image.width:
        return image.copy()
    height = variant_height(image.width, image.height, width)
    return image.resize((width, height), Image.Resampling.LANCZOS)


def encode_webp(image: Image.Image, quality: int = WEBP_QUALITY) -> bytes:
    """Encode ``image`` as WebP bytes."""
    output_stream = io.BytesIO()
    image.save(output_stream, format=WEBP_FORMAT, quality=quality)
    return output_stream.getvalue()
