"""Image preparation for vision requests.

Hidden design decisions:
- Decoder and resampling filter (Pillow, LANCZOS)
- Alpha flattening onto a white background
- Quality heuristic based on the original width
"""

import base64
import io
import math

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field

from ..errors import ImageProcessingError


class PreparedImage(BaseModel):
    """JPEG-encoded image ready to embed in a request."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False, description="JPEG bytes")
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    quality: int = Field(ge=1, le=100, description="JPEG quality used")

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:image/jpeg;base64,{self.to_base64()}"


def _open(image: bytes | Image.Image) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    try:
        opened = Image.open(io.BytesIO(image))
        opened.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageProcessingError(f"could not decode image: {e}") from e
    return opened


def _check_dimensions(width: float, height: float) -> None:
    if (
        math.isnan(width)
        or math.isnan(height)
        or width <= 0
        or height <= 0
    ):
        raise ImageProcessingError(f"invalid image dimensions {width}x{height}")


def _to_rgb(img: Image.Image) -> Image.Image:
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[3])
        return background
    return img.convert("RGB")


def prepare_image(
    image: bytes | Image.Image,
    max_dimension: int = 1024,
    quality: float = 0.8,
    large_quality: float = 0.5,
    large_width: int = 1000,
) -> PreparedImage:
    """Downsize and re-encode an image as JPEG.

    Neither side of the result exceeds ``max_dimension``; the aspect
    ratio is kept and small images are never upscaled. Images wider than
    ``large_width`` are compressed with ``large_quality``.

    Args:
        image: Encoded image bytes or an already decoded Pillow image
        max_dimension: Largest allowed width or height in pixels
        quality: JPEG quality (0-1] for ordinary images
        large_quality: JPEG quality (0-1] for wide images
        large_width: Width above which ``large_quality`` is used

    Returns:
        PreparedImage with the encoded bytes and final dimensions

    Raises:
        ImageProcessingError: If decoding, resizing or encoding fails, or
            if any stage yields a zero-area image
    """
    img = _open(image)
    original_width, original_height = img.size
    _check_dimensions(original_width, original_height)

    chosen = large_quality if original_width > large_width else quality
    jpeg_quality = max(1, min(100, round(chosen * 100)))

    try:
        img = _to_rgb(img)
        if max(img.size) > max_dimension:
            img = img.copy()
            img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)
        _check_dimensions(*img.size)

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=jpeg_quality, optimize=True)
    except ImageProcessingError:
        raise
    except (Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageProcessingError(f"could not re-encode image: {e}") from e

    data = buffer.getvalue()
    if not data:
        raise ImageProcessingError("encoder produced no data")

    return PreparedImage(
        data=data,
        width=img.size[0],
        height=img.size[1],
        quality=jpeg_quality,
    )
