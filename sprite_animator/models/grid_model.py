"""Модели сетки спрайт-листа: спецификация, геометрия ячеек, кадры.

Принципы:
- SRP: структуры данных и чистая целочисленная арифметика, без работы с пикселями.
- Чистый код: все модели неизменяемы (`frozen=True`).
"""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Tuple

from sprite_animator.models.errors import InvalidGeometry


@dataclass(frozen=True)
class GridSpec:
    """Как, по мнению вызывающего кода, устроен исходный спрайт-лист.

    Fields:
        rows: Число строк сетки, >= 1.
        cols: Число столбцов сетки, >= 1.
        padding_x: Ширина вертикальных полос между ячейками (и по краям), px.
        padding_y: Высота горизонтальных полос между ячейками (и по краям), px.
        auto_trim: Обрезать пустые поля перед нарезкой.
    """
    rows: int
    cols: int
    padding_x: int = 0
    padding_y: int = 0
    auto_trim: bool = True

    def validate(self) -> None:
        """Проверяет инварианты; при нарушении бросает `InvalidGeometry`."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidGeometry(
                f"Сетка должна быть не меньше 1x1, получено {self.rows}x{self.cols}",
                rows=self.rows,
                cols=self.cols,
            )
        if self.padding_x < 0 or self.padding_y < 0:
            raise InvalidGeometry(
                f"Отступы не могут быть отрицательными: ({self.padding_x}, {self.padding_y})",
                rows=self.rows,
                cols=self.cols,
            )


@dataclass(frozen=True)
class GridLayout:
    """Предложение раскладки {rows, cols}; носит рекомендательный характер."""
    rows: int
    cols: int

    def to_spec(self, **overrides) -> GridSpec:
        return GridSpec(rows=self.rows, cols=self.cols, **overrides)


# Раскладка по умолчанию, если автоопределение недоступно или не удалось.
DEFAULT_LAYOUT = GridLayout(rows=2, cols=3)


@dataclass(frozen=True)
class CellGeometry:
    """Размер ячейки и отступы, вычисленные один раз на всю нарезку."""
    cell_width: int
    cell_height: int
    padding_x: int = 0
    padding_y: int = 0

    def origin(self, row: int, col: int) -> Tuple[int, int]:
        sx = self.padding_x + col * (self.cell_width + self.padding_x)
        sy = self.padding_y + row * (self.cell_height + self.padding_y)
        return sx, sy

    def box(self, row: int, col: int) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) в порядке PIL, правая/нижняя граница не включается."""
        sx, sy = self.origin(row, col)
        return sx, sy, sx + self.cell_width, sy + self.cell_height


@dataclass(frozen=True)
class BoundingBox:
    """Область содержимого: [top, bottom) x [left, right)."""
    top: int
    bottom: int
    left: int
    right: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_degenerate(self) -> bool:
        return self.right <= self.left or self.bottom <= self.top

    def covers(self, width: int, height: int) -> bool:
        """True, если рамка совпадает со всем изображением."""
        return self.top == 0 and self.left == 0 and self.bottom == height and self.right == width

    def as_crop_box(self) -> Tuple[int, int, int, int]:
        return self.left, self.top, self.right, self.bottom


@dataclass(frozen=True)
class FramePosition:
    row: int
    col: int


@dataclass(frozen=True)
class FrameRecord:
    """Один кадр, вырезанный из ячейки сетки.

    Fields:
        id: Уникальный идентификатор (uuid4 hex); порядок задаётся только позицией в списке.
        image: Закодированное PNG (без потерь, с альфа-каналом).
        position: Позиция ячейки (row, col), отсчёт с нуля.
        width: Ширина кадра, px.
        height: Высота кадра, px.
    """
    id: str
    image: bytes
    position: FramePosition
    width: int
    height: int

    @property
    def data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.image).decode("ascii")

    @staticmethod
    def filename(index: int) -> str:
        """Имя файла для экспорта: нумерация с 1."""
        return f"frame_{index + 1}.png"
