"""Ошибки предметной области: декодирование и геометрия сетки."""
from __future__ import annotations

from typing import Optional


class DecodeFailure(ValueError):
    """Входные данные не распознаны как изображение."""


class InvalidGeometry(ValueError):
    """Некорректная сетка: rows/cols < 1 или размер ячейки <= 0.

    Атрибуты содержат исходные параметры и вычисленные размеры ячейки
    (если до их вычисления дошло), чтобы вызывающий код мог показать причину.
    """

    def __init__(
        self,
        message: str,
        *,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        cell_width: Optional[int] = None,
        cell_height: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.rows = rows
        self.cols = cols
        self.cell_width = cell_width
        self.cell_height = cell_height
