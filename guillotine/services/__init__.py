"""Services for guillotine."""

from guillotine.services.export_service import (
    ExportError,
    output_dir_for,
    save_chunks,
    split_file,
)

__all__ = [
    "ExportError",
    "output_dir_for",
    "save_chunks",
    "split_file",
]
