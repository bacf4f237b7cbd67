"""
Line difference profiles.

Scans an image along one axis and scores every boundary between two
adjacent full lines (rows or columns) by the mean absolute per-channel
intensity change across it.
"""

import numpy as np
import cv2

from .base import Axis, Discontinuity, EmptyAxisError, MalformedImageError

CHANNELS = 3


def check_image(image: np.ndarray) -> None:
    """
    Ensure the image is a non-empty (height, width, 3) uint8 array.

    Args:
        image: Image as numpy array.

    Raises:
        MalformedImageError: If the array is not an RGB pixel grid.
    """
    if not isinstance(image, np.ndarray):
        raise MalformedImageError(f"Expected numpy array, got {type(image).__name__}")

    if image.ndim != 3 or image.shape[2] != CHANNELS:
        raise MalformedImageError(f"Expected (height, width, 3) array, got shape {image.shape}")

    if image.dtype != np.uint8:
        raise MalformedImageError(f"Expected uint8 pixels, got {image.dtype}")

    height, width = image.shape[:2]
    if width == 0 or height == 0:
        raise MalformedImageError(f"Image has zero size: {width}x{height}")


def _lines(image: np.ndarray, axis: Axis) -> np.ndarray:
    """Return the image with lines along the first dimension."""
    if axis is Axis.VERTICAL:
        # Columns become rows
        image = image.transpose(1, 0, 2)
    return np.ascontiguousarray(image)


def difference_profile(image: np.ndarray, axis: Axis) -> np.ndarray:
    """
    Calculate the difference profile along an axis.

    Entry i is the mean absolute per-channel difference between line i and
    line i + 1, so an axis with N lines yields N - 1 scores.

    Args:
        image: RGB image as (height, width, 3) uint8 array.
        axis: HORIZONTAL compares rows, VERTICAL compares columns.

    Returns:
        1D float64 array of scores.

    Raises:
        MalformedImageError: If the image is not an RGB pixel grid.
        EmptyAxisError: If the axis has fewer than two lines.
    """
    check_image(image)
    lines = _lines(image, axis)

    count, length = lines.shape[:2]
    if count < 2:
        raise EmptyAxisError(f"Cannot profile {axis.value} axis with {count} line(s)")

    # Exact uint8 absolute difference of each line against the next
    diff = cv2.absdiff(lines[:-1], lines[1:])

    totals = diff.reshape(count - 1, -1).sum(axis=1, dtype=np.int64)
    return totals / float(length * CHANNELS)


def strongest_discontinuity(image: np.ndarray, axis: Axis) -> Discontinuity:
    """
    Find the strongest discontinuity along an axis.

    Ties resolve to the first (lowest) position.

    Args:
        image: RGB image as (height, width, 3) uint8 array.
        axis: Axis to scan.

    Returns:
        Discontinuity with the 1-based cut offset and its score.
    """
    profile = difference_profile(image, axis)
    # argmax returns the first occurrence of the maximum
    position = int(np.argmax(profile))

    return Discontinuity(
        axis=axis,
        index=position + 1,
        score=float(profile[position]),
    )


def profile_both(image: np.ndarray) -> tuple[Discontinuity, Discontinuity]:
    """Return the (horizontal, vertical) strongest discontinuities."""
    return (
        strongest_discontinuity(image, Axis.HORIZONTAL),
        strongest_discontinuity(image, Axis.VERTICAL),
    )
