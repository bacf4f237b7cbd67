"""
Base types for guillotine splitting.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
import numpy as np
from PIL import Image


class GuillotineError(Exception):
    """Base class for all guillotine errors."""

    pass


class EmptyAxisError(GuillotineError):
    """Raised when an axis has fewer than two lines to compare."""

    pass


class MalformedImageError(GuillotineError):
    """Raised when an image is empty or not an RGB pixel grid."""

    pass


class Axis(str, Enum):
    """Scan direction of a cut."""

    HORIZONTAL = "horizontal"
    """Compare successive rows, cut into top and bottom."""

    VERTICAL = "vertical"
    """Compare successive columns, cut into left and right."""


@dataclass(frozen=True)
class Discontinuity:
    """Strongest discontinuity found along one axis."""

    axis: Axis
    """Axis that was scanned."""

    index: int
    """Number of lines before the cut (1-based cut offset)."""

    score: float
    """Mean per-channel absolute intensity change across the cut."""


@dataclass(frozen=True)
class CutDecision:
    """Decision taken for one region during recursion."""

    axis: Axis
    """Winning axis."""

    index: int
    """Cut offset along the winning axis, relative to the region."""

    score: float
    """Score of the winning axis."""

    accepted: bool
    """Whether the score exceeded the threshold."""

    x_offset: int = 0
    """X offset of the evaluated region in the original image."""

    y_offset: int = 0
    """Y offset of the evaluated region in the original image."""

    width: int = 0
    """Width of the evaluated region."""

    height: int = 0
    """Height of the evaluated region."""

    depth: int = 0
    """Recursion depth of the evaluated region."""

    @property
    def horizontal(self) -> bool:
        return self.axis is Axis.HORIZONTAL


@dataclass
class ImageChunk:
    """A leaf sub-image produced by the splitter."""

    image: np.ndarray
    """The chunk image data as numpy array."""

    index: int
    """Sequential index of this chunk in output order."""

    x_offset: int
    """X offset from original image origin."""

    y_offset: int
    """Y offset from original image origin."""

    depth: int = 0
    """Number of cuts between the original image and this chunk."""

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height) bounds in original image."""
        return (self.x_offset, self.y_offset, self.width, self.height)

    def to_pil(self) -> Image.Image:
        """Convert chunk to PIL Image."""
        return Image.fromarray(self.image)

    def save(self, path: Path, format: Optional[str] = None) -> Path:
        """Save chunk to file, inferring the format from the suffix when not given."""
        self.to_pil().save(path, format)
        return path


@dataclass
class SplitResult:
    """Result of splitting an image."""

    chunks: list[ImageChunk]
    """Leaf chunks in output order."""

    original_size: tuple[int, int]
    """Original image size (width, height)."""

    decisions: list[CutDecision] = field(default_factory=list)
    """Every cut decision taken, in depth-first order."""

    metadata: dict = field(default_factory=dict)
    """Additional metadata about the split."""

    @property
    def num_chunks(self) -> int:
        """Total number of chunks."""
        return len(self.chunks)

    @property
    def was_split(self) -> bool:
        """Whether at least one cut was accepted."""
        return any(decision.accepted for decision in self.decisions)

    @property
    def images(self) -> list[np.ndarray]:
        """Chunk pixel data in output order."""
        return [chunk.image for chunk in self.chunks]

    @property
    def covered_pixels(self) -> int:
        """Number of source pixels that ended up in a chunk."""
        return sum(chunk.width * chunk.height for chunk in self.chunks)
