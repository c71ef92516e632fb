"""Тесты порядка кадров и экспорта."""
import zipfile

import pytest

from sprite_animator.models.animation_model import AnimationFormat
from sprite_animator.models.grid_model import GridSpec
from sprite_animator.services.frame_service import FrameService
from sprite_animator.services.split_service import SplitService

from conftest import CELL_COLORS, strip_sheet


@pytest.fixture
def frames():
    return SplitService().slice(strip_sheet(CELL_COLORS, cell=8, border=0), GridSpec(rows=1, cols=4))


def _ids(frames):
    return [f.id for f in frames]


def test_move_frame_swaps_neighbours(frames):
    service = FrameService()
    moved = service.move_frame(frames, 1, "left")
    assert _ids(moved) == [frames[1].id, frames[0].id, frames[2].id, frames[3].id]
    moved = service.move_frame(frames, 2, "right")
    assert _ids(moved) == [frames[0].id, frames[1].id, frames[3].id, frames[2].id]


def test_move_frame_at_edge_is_noop(frames):
    service = FrameService()
    assert _ids(service.move_frame(frames, 0, "left")) == _ids(frames)
    assert _ids(service.move_frame(frames, 3, "right")) == _ids(frames)


def test_move_frame_unknown_direction(frames):
    with pytest.raises(ValueError):
        FrameService().move_frame(frames, 0, "up")


def test_delete_and_reverse_do_not_mutate(frames):
    service = FrameService()
    original = _ids(frames)
    assert _ids(service.delete_frame(frames, 2)) == original[:2] + original[3:]
    assert _ids(service.reverse(frames)) == original[::-1]
    assert _ids(frames) == original


def test_export_frames_numbered_from_one(tmp_path, frames):
    paths = FrameService().export_frames(frames, tmp_path / "frames")
    assert [p.name for p in paths] == ["frame_1.png", "frame_2.png", "frame_3.png", "frame_4.png"]
    assert paths[0].read_bytes() == frames[0].image


def test_export_zip(tmp_path, frames):
    out = FrameService().export_zip(frames, tmp_path / "frames.zip")
    with zipfile.ZipFile(out) as archive:
        assert archive.namelist() == ["frame_1.png", "frame_2.png", "frame_3.png", "frame_4.png"]
        assert archive.read("frame_4.png") == frames[3].image


def test_output_names():
    service = FrameService()
    spec = GridSpec(rows=2, cols=3)
    assert service.zip_name(spec) == "frames_2x3.zip"
    assert service.animation_name(spec) == "animation_2x3.gif"
    assert service.animation_name(spec, AnimationFormat.WEBP) == "animation_2x3.webp"
