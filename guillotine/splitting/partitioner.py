"""
Recursive guillotine splitter.

Cuts an image in two along the strongest horizontal or vertical
discontinuity, then splits each half the same way until no boundary is
strong enough or the region drops below the minimum size.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional
import numpy as np

from guillotine.config import GuillotineConfig
from .base import Axis, CutDecision, ImageChunk, SplitResult
from .profiler import check_image, profile_both

logger = logging.getLogger(__name__)


@dataclass
class _Branch:
    """Output of one recursive call."""

    leaves: list[tuple[np.ndarray, int, int, int]] = field(default_factory=list)
    """(image, x_offset, y_offset, depth) of each leaf."""

    decisions: list[CutDecision] = field(default_factory=list)

    def extend(self, other: "_Branch") -> None:
        self.leaves.extend(other.leaves)
        self.decisions.extend(other.decisions)


class GuillotineSplitter:
    """
    Splits images by recursive binary cuts along full scan lines.

    Each step profiles both axes, keeps the axis with the larger score
    (horizontal on exact ties) and cuts there when the score exceeds the
    threshold. The two halves are independent copies, so they are split
    concurrently for the first ``parallel_depth`` levels and sequentially
    below that; the output order is the same either way.
    """

    def __init__(self, config: Optional[GuillotineConfig] = None):
        """Initialize splitter with configuration."""
        self.config = config or GuillotineConfig()

    def decide(self, image: np.ndarray) -> CutDecision:
        """
        Compute the cut decision for an image without splitting it.

        Args:
            image: RGB image as (height, width, 3) uint8 array.

        Returns:
            CutDecision for the whole image.
        """
        check_image(image)
        return self._decide(image, 0, 0, 0)

    def split(self, image: np.ndarray) -> SplitResult:
        """
        Split an image into leaf chunks.

        Args:
            image: RGB image as (height, width, 3) uint8 array.

        Returns:
            SplitResult with chunks in first-region-first order.

        Raises:
            MalformedImageError: If the image is empty or not RGB.
        """
        check_image(image)
        height, width = image.shape[:2]

        branch = self._split(image, 0, 0, 0)

        chunks = [
            ImageChunk(image=leaf, index=index, x_offset=x, y_offset=y, depth=depth)
            for index, (leaf, x, y, depth) in enumerate(branch.leaves)
        ]

        result = SplitResult(
            chunks=chunks,
            original_size=(width, height),
            decisions=branch.decisions,
            metadata={
                "threshold": self.config.threshold,
                "min_size": self.config.min_size,
                "cuts": sum(1 for d in branch.decisions if d.accepted),
            },
        )

        logger.info(
            f"Split {width}x{height} image into {result.num_chunks} chunk(s) "
            f"with {result.metadata['cuts']} cut(s)"
        )

        return result

    def _decide(self, image: np.ndarray, x: int, y: int, depth: int) -> CutDecision:
        height, width = image.shape[:2]
        h, v = profile_both(image)

        horizontal = h.score >= v.score
        best = h if horizontal else v
        cut = best.score > self.config.threshold

        logger.debug(f"Cut: {cut}, Horizontal: {horizontal}, Max: {best.score}")

        return CutDecision(
            axis=best.axis,
            index=best.index,
            score=best.score,
            accepted=cut,
            x_offset=x,
            y_offset=y,
            width=width,
            height=height,
            depth=depth,
        )

    def _split(self, image: np.ndarray, x: int, y: int, depth: int) -> _Branch:
        height, width = image.shape[:2]
        branch = _Branch()

        # Too small to keep
        if width < self.config.min_size or height < self.config.min_size:
            logger.debug(f"Dropping {width}x{height} region at ({x}, {y})")
            return branch

        decision = self._decide(image, x, y, depth)
        branch.decisions.append(decision)

        if not decision.accepted:
            branch.leaves.append((image, x, y, depth))
            return branch

        index = decision.index
        if decision.axis is Axis.HORIZONTAL:
            first = image[:index].copy()
            second = image[index:].copy()
            first_origin, second_origin = (x, y), (x, y + index)
        else:
            first = image[:, :index].copy()
            second = image[:, index:].copy()
            first_origin, second_origin = (x, y), (x + index, y)

        if depth < self.config.parallel_depth:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="guillotine") as executor:
                first_future = executor.submit(self._split, first, *first_origin, depth + 1)
                second_future = executor.submit(self._split, second, *second_origin, depth + 1)
                # Join in region order, not completion order
                first_branch = first_future.result()
                second_branch = second_future.result()
        else:
            first_branch = self._split(first, *first_origin, depth + 1)
            second_branch = self._split(second, *second_origin, depth + 1)

        branch.extend(first_branch)
        branch.extend(second_branch)
        return branch


def guillotine(
    image: np.ndarray,
    threshold: float = 30.0,
    min_size: int = 100,
    parallel_depth: int = 4,
) -> list[np.ndarray]:
    """
    Split an image and return only the leaf images.

    Args:
        image: RGB image as (height, width, 3) uint8 array.
        threshold: Minimum score required to accept a cut.
        min_size: Minimum width and height of a region that is kept.
        parallel_depth: Number of recursion levels split concurrently.

    Returns:
        Leaf images in output order.
    """
    config = GuillotineConfig(
        threshold=threshold,
        min_size=min_size,
        parallel_depth=parallel_depth,
    )
    return GuillotineSplitter(config).split(image).images
