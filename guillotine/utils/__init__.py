"""Utility modules for guillotine."""

from guillotine.utils.file_validation import (
    FileType,
    ValidationError,
    detect_file_type_from_bytes,
    ensure_rgb_array,
    load_image,
    validate_image_file,
)

__all__ = [
    "FileType",
    "ValidationError",
    "detect_file_type_from_bytes",
    "ensure_rgb_array",
    "load_image",
    "validate_image_file",
]
