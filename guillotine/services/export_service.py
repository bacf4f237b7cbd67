"""
Export service for writing split results to disk.

This service handles:
- Output directory naming and creation
- Sequential chunk file writing
- Cleanup of partially written outputs
"""

import logging
from pathlib import Path
from typing import Optional

from guillotine.config import ExportConfig, Settings, get_settings
from guillotine.splitting import GuillotineError, GuillotineSplitter, SplitResult
from guillotine.utils.file_validation import load_image

logger = logging.getLogger(__name__)

# PIL format names for the supported extensions
PIL_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "bmp": "BMP",
    "tiff": "TIFF",
}


class ExportError(GuillotineError):
    """Raised when writing split results fails."""

    pass


def output_dir_for(source: Path, export_config: Optional[ExportConfig] = None) -> Path:
    """
    Get the directory that receives the chunks of a source image.

    Args:
        source: Path of the source image.
        export_config: Export settings; a configured output_dir replaces
            the source's parent directory.

    Returns:
        Directory named after the source file stem.
    """
    export_config = export_config or ExportConfig()
    parent = export_config.output_dir if export_config.output_dir is not None else source.parent
    return parent / source.stem


def save_chunks(
    result: SplitResult,
    output_dir: Path,
    image_format: str = "png",
) -> list[Path]:
    """
    Save every chunk of a split result as "<index>.<format>".

    Args:
        result: Split result to save.
        output_dir: Directory to save chunk images (created if missing).
        image_format: File extension, one of PIL_FORMATS.

    Returns:
        Paths of the written files in chunk order.

    Raises:
        ExportError: If a file cannot be written. Files already written
            for this result are removed.
    """
    if image_format not in PIL_FORMATS:
        raise ExportError(
            f"Unknown image format: {image_format}. "
            f"Available: {list(PIL_FORMATS)}"
        )

    paths: list[Path] = []

    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        for chunk in result.chunks:
            path = output_dir / f"{chunk.index}.{image_format}"
            logger.info(f"Saving {path}...")
            chunk.save(path, PIL_FORMATS[image_format])
            paths.append(path)

    except OSError as e:
        _cleanup_partial_outputs(paths)
        raise ExportError(f"Failed to write chunks to {output_dir}: {e}") from e

    return paths


def _cleanup_partial_outputs(paths: list[Path]) -> None:
    """
    Remove chunk files that were written before an error.

    Args:
        paths: Paths of the files to delete.
    """
    for path in paths:
        try:
            path.unlink(missing_ok=True)
            logger.debug(f"Cleaned up partial output: {path}")
        except OSError as e:
            logger.warning(f"Failed to clean up {path}: {e}")


def split_file(source: Path, settings: Optional[Settings] = None) -> list[Path]:
    """
    Load, split and save one image file.

    Args:
        source: Path of the image to split.
        settings: Settings to use (defaults to the global settings).

    Returns:
        Paths of the written chunk files.

    Raises:
        GuillotineError: If loading, splitting or saving fails.
    """
    settings = settings or get_settings()

    image = load_image(source, max_size_mb=settings.max_file_size_mb)
    result = GuillotineSplitter(settings.splitting).split(image)

    output_dir = output_dir_for(source, settings.export)
    return save_chunks(result, output_dir, settings.export.image_format)
