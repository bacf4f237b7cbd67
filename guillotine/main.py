from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import pydantic

from guillotine.config import ExportConfig, GuillotineConfig, Settings, get_settings
from guillotine.services.export_service import PIL_FORMATS, split_file
from guillotine.splitting import GuillotineError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guillotine",
        description="Split images into sub-images along their strongest horizontal or vertical seams",
    )
    parser.add_argument("images", nargs="+", type=Path, help="Image files to split")
    parser.add_argument("--threshold", type=float, help="Minimum discontinuity score needed to cut")
    parser.add_argument("--min-size", type=int, help="Minimum width/height of a kept region")
    parser.add_argument("--parallel-depth", type=int, help="Recursion levels split concurrently (0 = sequential)")
    parser.add_argument("--output-dir", type=Path, help="Parent directory for outputs (default: next to each image)")
    parser.add_argument("--format", dest="image_format", choices=sorted(PIL_FORMATS), help="Output file format")
    parser.add_argument("--debug", action="store_true", help="Log every cut decision")
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of the settings with command line values applied."""
    splitting = {
        "threshold": args.threshold,
        "min_size": args.min_size,
        "parallel_depth": args.parallel_depth,
    }
    export = {
        "output_dir": args.output_dir,
        "image_format": args.image_format,
    }

    splitting_config = GuillotineConfig(
        **{**settings.splitting.model_dump(), **{k: v for k, v in splitting.items() if v is not None}}
    )
    export_config = ExportConfig(
        **{**settings.export.model_dump(), **{k: v for k, v in export.items() if v is not None}}
    )

    return settings.model_copy(
        update={
            "debug": settings.debug or args.debug,
            "splitting": splitting_config,
            "export": export_config,
        }
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _apply_overrides(get_settings(), args)
    except pydantic.ValidationError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    failed = 0
    for path in args.images:
        try:
            paths = split_file(path, settings)
            logger.info(f"{path}: wrote {len(paths)} image(s)")
        except GuillotineError as exc:
            logger.error(f"{path}: {exc}")
            failed += 1

    if failed:
        logger.error(f"{failed} of {len(args.images)} image(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
