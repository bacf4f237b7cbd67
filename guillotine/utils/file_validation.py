"""
Image file validation and loading.

Input files are checked in layers before they reach the splitter:
1. Existence and size limits
2. Magic byte detection (file signature)
3. PIL verification

Decoded images are normalized to (height, width, 3) uint8 RGB arrays.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from guillotine.splitting.base import GuillotineError, MalformedImageError

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    """Supported input file types."""

    IMAGE = "image"
    UNKNOWN = "unknown"


# Magic byte signatures for file type detection
MAGIC_BYTES = {
    b"\xff\xd8\xff": FileType.IMAGE,  # JPEG
    b"\x89PNG\r\n\x1a\n": FileType.IMAGE,  # PNG
    b"GIF87a": FileType.IMAGE,  # GIF87a
    b"GIF89a": FileType.IMAGE,  # GIF89a
    b"BM": FileType.IMAGE,  # BMP
    b"II*\x00": FileType.IMAGE,  # TIFF (little-endian)
    b"MM\x00*": FileType.IMAGE,  # TIFF (big-endian)
    b"RIFF": FileType.IMAGE,  # WebP (needs further validation)
}


class ValidationError(GuillotineError):
    """Raised when an input file fails validation."""

    pass


def detect_file_type_from_bytes(file_content: bytes) -> FileType:
    """
    Detect file type from magic bytes (file signature).

    Args:
        file_content: First few bytes of the file.

    Returns:
        Detected file type.
    """
    for signature, file_type in MAGIC_BYTES.items():
        if file_content.startswith(signature):
            # RIFF is only an image when it is WebP
            if signature == b"RIFF":
                if len(file_content) >= 12 and file_content[8:12] == b"WEBP":
                    return FileType.IMAGE
                continue
            return file_type

    return FileType.UNKNOWN


def validate_image_with_pil(path: Path) -> bool:
    """
    Validate that a file is a decodable image using PIL.

    Args:
        path: Path to the image file.

    Returns:
        True if valid image, False otherwise.
    """
    try:
        with Image.open(path) as img:
            img.verify()
        return True
    except Exception as e:
        logger.debug(f"PIL validation failed for {path}: {e}")
        return False


def validate_image_file(path: Path, max_size_mb: int = 200) -> None:
    """
    Perform file validation with multi-layer checks.

    Args:
        path: Path to the image file.
        max_size_mb: Maximum file size in MB.

    Raises:
        ValidationError: If the file fails any validation check.
    """
    if not path.is_file():
        raise ValidationError(f"File not found: {path}")

    # Layer 1: Size check
    file_size = path.stat().st_size

    if file_size == 0:
        raise ValidationError(f"File is empty: {path}")

    max_size_bytes = max_size_mb * 1024 * 1024
    if file_size > max_size_bytes:
        raise ValidationError(
            f"File too large: {file_size / 1024 / 1024:.1f}MB "
            f"(max {max_size_mb}MB)"
        )

    # Layer 2: Magic bytes detection
    with path.open("rb") as f:
        header = f.read(32)

    if detect_file_type_from_bytes(header) == FileType.UNKNOWN:
        raise ValidationError(f"Unknown or unsupported file type: {path}")

    # Layer 3: Library-specific validation
    if not validate_image_with_pil(path):
        raise ValidationError(f"File is not a valid image: {path}")

    logger.debug(f"File validated successfully: {path}, {file_size / 1024:.1f}KB")


def ensure_rgb_array(image: Union[np.ndarray, Image.Image, Path, str]) -> np.ndarray:
    """
    Convert various image types to a (height, width, 3) uint8 array.

    Grayscale arrays are stacked to three channels and an alpha channel is
    dropped. Paths are opened with PIL without further validation.

    Args:
        image: Image as numpy array, PIL Image, or path.

    Returns:
        RGB image as numpy array.

    Raises:
        MalformedImageError: If the image is empty or cannot be read as RGB.
    """
    if isinstance(image, (str, Path)):
        with Image.open(image) as img:
            return ensure_rgb_array(img.convert("RGB"))

    if isinstance(image, Image.Image):
        if image.mode != "RGB":
            image = image.convert("RGB")
        image = np.array(image)

    if not isinstance(image, np.ndarray):
        raise MalformedImageError(f"Unsupported image type: {type(image).__name__}")

    if image.ndim == 2:
        image = np.stack([image] * 3, axis=-1)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = image[:, :, :3]

    if image.ndim != 3 or image.shape[2] != 3:
        raise MalformedImageError(f"Expected an RGB image, got shape {image.shape}")

    if image.dtype != np.uint8:
        raise MalformedImageError(f"Expected uint8 pixels, got {image.dtype}")

    height, width = image.shape[:2]
    if width == 0 or height == 0:
        raise MalformedImageError(f"Image has zero size: {width}x{height}")

    return np.ascontiguousarray(image)


def load_image(path: Path, max_size_mb: int = 200) -> np.ndarray:
    """
    Validate and decode an image file into an RGB array.

    Args:
        path: Path to the image file.
        max_size_mb: Maximum file size in MB.

    Returns:
        RGB image as (height, width, 3) uint8 array.

    Raises:
        ValidationError: If the file is missing, too large or not an image.
        MalformedImageError: If the decoded image is empty.
    """
    validate_image_file(path, max_size_mb=max_size_mb)
    image = ensure_rgb_array(path)

    height, width = image.shape[:2]
    logger.debug(f"Loaded {path}: {width}x{height}px")
    return image
