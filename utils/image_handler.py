"""
Image Validation Module

Checks recipe photos before they are sent to the recipe parser: the bytes
must decode as a real image of an allowed format and sane dimensions.
"""

import base64
import binascii
from io import BytesIO

from PIL import Image


class ImageValidationError(Exception):
    """Raised when an image fails validation."""
    pass


# PIL format name -> media type
FORMAT_MEDIA_TYPES = {
    'JPEG': 'image/jpeg',
    'PNG': 'image/png',
    'GIF': 'image/gif',
    'WEBP': 'image/webp',
}

# Maximum image dimensions (prevent decompression bombs)
MAX_WIDTH = 8000
MAX_HEIGHT = 8000

# Maximum decoded size (10MB)
MAX_FILE_SIZE = 10 * 1024 * 1024


def decode_base64_image(data):
    """Decode a base64 payload, tolerating a data: URL prefix."""
    if not data or not isinstance(data, str):
        raise ImageValidationError("imageData is required")
    if data.startswith('data:') and ',' in data:
        data = data.split(',', 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ImageValidationError("imageData is not valid base64") from None


def validate_image_bytes(image_data, media_type=None):
    """
    Validate raw image bytes.

    Args:
        image_data: Raw image bytes
        media_type: Declared media type; must agree with the decoded format

    Returns:
        str: The media type of the decoded image

    Raises:
        ImageValidationError: If the image is invalid or potentially malicious
    """
    if not image_data:
        raise ImageValidationError("Image is empty")
    if len(image_data) > MAX_FILE_SIZE:
        raise ImageValidationError(f"Image too large: {len(image_data)} bytes (max {MAX_FILE_SIZE})")

    buffer = BytesIO(image_data)
    try:
        img = Image.open(buffer)
        # Detects corrupted or fake files
        img.verify()
        buffer.seek(0)
        img = Image.open(buffer)
        image_format = img.format
        width, height = img.size
    except Image.DecompressionBombError:
        raise ImageValidationError("Image appears to be a decompression bomb (too large when decoded)") from None
    except Exception as e:
        raise ImageValidationError(f"Invalid or corrupted image: {e}") from None

    detected = FORMAT_MEDIA_TYPES.get(image_format)
    if detected is None:
        raise ImageValidationError(
            f"Invalid image format: {image_format}. "
            f"Allowed formats: {', '.join(sorted(FORMAT_MEDIA_TYPES))}"
        )

    if width > MAX_WIDTH or height > MAX_HEIGHT:
        raise ImageValidationError(
            f"Image dimensions too large: {width}x{height}. "
            f"Maximum: {MAX_WIDTH}x{MAX_HEIGHT}"
        )

    if media_type and media_type != detected:
        raise ImageValidationError(f"Image is {detected} but was declared as {media_type}")

    return detected
