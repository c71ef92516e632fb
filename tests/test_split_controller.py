"""Тесты конвейера: декодирование -> обрезка -> нарезка -> анимация."""
import io

import pytest
from PIL import Image

from sprite_animator.controllers.split_controller import SplitController
from sprite_animator.models.animation_model import AnimationSettings
from sprite_animator.models.errors import DecodeFailure, InvalidGeometry
from sprite_animator.models.grid_model import DEFAULT_LAYOUT, GridLayout, GridSpec

from conftest import png_bytes


def test_split_with_auto_trim(sprite_sheet_file):
    controller = SplitController()
    controller.open_file(sprite_sheet_file)
    frames = controller.split(GridSpec(rows=1, cols=4))
    assert [(f.width, f.height) for f in frames] == [(40, 40)] * 4
    assert controller.spec == GridSpec(rows=1, cols=4)


def test_split_without_trim_keeps_border(sprite_sheet_file):
    controller = SplitController()
    controller.open_file(sprite_sheet_file)
    frames = controller.split(GridSpec(rows=1, cols=4, auto_trim=False))
    # источник 200x80 без обрезки
    assert [(f.width, f.height) for f in frames] == [(50, 80)] * 4


def test_split_image_is_stateless(sprite_sheet):
    controller = SplitController()
    frames = controller.split_image(sprite_sheet, GridSpec(rows=1, cols=4))
    assert len(frames) == 4
    assert controller.frames == []
    assert controller.source is None


def test_threaded_controller(sprite_sheet):
    frames = SplitController(max_workers=3).split_image(sprite_sheet, GridSpec(rows=1, cols=4))
    assert [f.position.col for f in frames] == [0, 1, 2, 3]


def test_open_bytes_and_suggest(sprite_sheet):
    controller = SplitController()
    assert controller.suggest_layout() == DEFAULT_LAYOUT
    controller.open_bytes(png_bytes(sprite_sheet))
    # 200x80 -> r = 2.5 -> полоса 2x3
    assert controller.suggest_layout() == GridLayout(rows=2, cols=3)


def test_open_bytes_failure():
    with pytest.raises(DecodeFailure):
        SplitController().open_bytes(b"nope")


def test_geometry_error_keeps_previous_frames(sprite_sheet_file):
    controller = SplitController()
    controller.open_file(sprite_sheet_file)
    frames = controller.split(GridSpec(rows=1, cols=4))
    # после обрезки 160x40: (160 - 40 * 6) // 5 < 0
    with pytest.raises(InvalidGeometry):
        controller.split(GridSpec(rows=5, cols=5, padding_x=40))
    assert [f.id for f in controller.frames] == [f.id for f in frames]
    assert controller.spec == GridSpec(rows=1, cols=4)


def test_operations_require_state():
    controller = SplitController()
    with pytest.raises(RuntimeError):
        controller.split(GridSpec(rows=1, cols=1))
    with pytest.raises(RuntimeError):
        controller.create_animation()


def test_frame_management(sprite_sheet_file):
    controller = SplitController()
    controller.open_file(sprite_sheet_file)
    frames = controller.split(GridSpec(rows=1, cols=4))
    ids = [f.id for f in frames]

    assert [f.id for f in controller.move_frame(0, "right")] == [ids[1], ids[0], ids[2], ids[3]]
    assert [f.id for f in controller.delete_frame(0)] == [ids[0], ids[2], ids[3]]
    assert [f.id for f in controller.reverse_frames()] == [ids[3], ids[2], ids[0]]
    controller.clear()
    assert controller.frames == []


def test_outputs(tmp_path, sprite_sheet_file):
    controller = SplitController()
    controller.open_file(sprite_sheet_file)
    controller.split(GridSpec(rows=1, cols=4))
    settings = AnimationSettings(width=32, height=32)

    with Image.open(io.BytesIO(controller.create_animation(settings))) as gif:
        assert gif.n_frames == 4

    assert controller.default_animation_name(settings) == "animation_1x4.gif"
    assert controller.default_zip_name() == "frames_1x4.zip"
    assert controller.save_animation(tmp_path / "a.gif", settings).exists()
    assert len(controller.export_frames(tmp_path / "frames")) == 4
    assert controller.export_zip(tmp_path / "f.zip").exists()


def test_opening_new_source_resets_frames(sprite_sheet_file, sprite_sheet):
    controller = SplitController()
    controller.open_file(sprite_sheet_file)
    controller.split(GridSpec(rows=1, cols=4))
    controller.open_bytes(png_bytes(sprite_sheet))
    assert controller.frames == []
    assert controller.spec is None
