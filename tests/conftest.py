"""Общие фикстуры: изображения строятся в памяти через numpy + PIL."""
from __future__ import annotations

import io
from typing import Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from sprite_animator.models.image_model import RasterImage

RED = (220, 30, 30, 255)
GREEN = (30, 180, 60, 255)
BLUE = (30, 60, 200, 255)
BLACK = (10, 10, 10, 255)
CELL_COLORS = [RED, GREEN, BLUE, BLACK]


def solid(width: int, height: int, color: Tuple[int, int, int, int]) -> RasterImage:
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[:, :] = color
    return RasterImage.from_pil(Image.fromarray(arr))


def strip_sheet(
    colors: Sequence[Tuple[int, int, int, int]],
    cell: int = 40,
    border: int = 20,
    background: Tuple[int, int, int, int] = (0, 0, 0, 0),
) -> RasterImage:
    """Горизонтальный ряд сплошных ячеек cell x cell в рамке шириной border."""
    width = cell * len(colors) + 2 * border
    height = cell + 2 * border
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[:, :] = background
    for i, color in enumerate(colors):
        x0 = border + i * cell
        arr[border:border + cell, x0:x0 + cell] = color
    return RasterImage.from_pil(Image.fromarray(arr))


def png_bytes(image: RasterImage) -> bytes:
    buffer = io.BytesIO()
    image.pil_image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sprite_sheet() -> RasterImage:
    return strip_sheet(CELL_COLORS)


@pytest.fixture
def sprite_sheet_file(tmp_path, sprite_sheet):
    path = tmp_path / "sheet.png"
    sprite_sheet.pil_image.save(path)
    return path
