from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from guillotine.config import ExportConfig, GuillotineConfig, Settings
from guillotine.services import ExportError, output_dir_for, save_chunks, split_file
from guillotine.splitting import GuillotineSplitter


def test_output_dir_defaults_to_source_stem():
    assert output_dir_for(Path("/scans/book.png")) == Path("/scans/book")


def test_output_dir_uses_configured_parent(tmp_path):
    config = ExportConfig(output_dir=tmp_path)

    assert output_dir_for(Path("/scans/book.png"), config) == tmp_path / "book"


def test_save_chunks_writes_numbered_files(tmp_path, seam_image):
    result = GuillotineSplitter().split(seam_image)
    output_dir = tmp_path / "nested" / "seam"

    paths = save_chunks(result, output_dir)

    assert paths == [output_dir / "0.png", output_dir / "1.png"]
    for path, chunk in zip(paths, result.chunks):
        with Image.open(path) as img:
            assert np.array_equal(np.array(img), chunk.image)


def test_save_chunks_rejects_unknown_format(tmp_path, seam_image):
    result = GuillotineSplitter().split(seam_image)

    with pytest.raises(ExportError, match="Unknown image format"):
        save_chunks(result, tmp_path, image_format="gif")


def test_save_chunks_removes_partial_output(tmp_path, seam_image):
    result = GuillotineSplitter().split(seam_image)
    # A directory in the way of the second chunk
    (tmp_path / "1.png").mkdir()

    with pytest.raises(ExportError):
        save_chunks(result, tmp_path)

    assert not (tmp_path / "0.png").exists()


def test_split_file_end_to_end(tmp_path, seam_image):
    source = tmp_path / "spread.png"
    Image.fromarray(seam_image).save(source)
    settings = Settings(
        splitting=GuillotineConfig(threshold=30.0, min_size=100, parallel_depth=1),
        export=ExportConfig(image_format="bmp"),
    )

    paths = split_file(source, settings)

    assert paths == [tmp_path / "spread" / "0.bmp", tmp_path / "spread" / "1.bmp"]
    with Image.open(paths[1]) as img:
        assert img.size == (100, 100)
        assert np.all(np.array(img) == 255)


def test_chunk_save_uses_explicit_format(tmp_path, seam_image):
    chunk = GuillotineSplitter().split(seam_image).chunks[1]
    path = tmp_path / "right.chunk"

    assert chunk.save(path, "BMP") == path

    with Image.open(path) as img:
        assert img.format == "BMP"
        assert np.array_equal(np.array(img), chunk.image)


def test_save_chunks_writes_through_chunk_save(monkeypatch, tmp_path, seam_image):
    calls = []

    def fake_save(chunk, path, format=None):
        calls.append((chunk.index, path.name, format))
        return path

    monkeypatch.setattr("guillotine.splitting.base.ImageChunk.save", fake_save)
    result = GuillotineSplitter().split(seam_image)

    save_chunks(result, tmp_path, image_format="tiff")

    assert calls == [(0, "0.tiff", "TIFF"), (1, "1.tiff", "TIFF")]
