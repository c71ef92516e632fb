"""Модели данных для изображений.

Принципы:
- SRP: только структура данных и минимальный доступ к пикселям, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class RasterImage:
    """Неизменяемый декодированный растр (RGBA) и его метаданные.

    Fields:
        pil_image: Изображение PIL, всегда в режиме "RGBA".
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL (после нормализации всегда "RGBA").
        source: Путь к исходному файлу, если изображение загружено с диска.
        size_bytes: Размер исходных данных, если доступен.
    """
    pil_image: Image.Image
    width: int
    height: int
    mode: str = "RGBA"
    source: Optional[Path] = None
    size_bytes: Optional[int] = None

    @classmethod
    def from_pil(
        cls,
        image: Image.Image,
        source: Optional[Path] = None,
        size_bytes: Optional[int] = None,
    ) -> "RasterImage":
        """Создаёт растр из изображения PIL, приводя его к RGBA.

        Исходный объект не изменяется: `convert` и `copy` возвращают новый буфер.
        """
        rgba = image.convert("RGBA") if image.mode != "RGBA" else image.copy()
        width, height = rgba.size
        return cls(
            pil_image=rgba,
            width=width,
            height=height,
            mode=rgba.mode,
            source=source,
            size_bytes=size_bytes,
        )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Возвращает RGBA-четвёрку пикселя (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Пиксель ({x}, {y}) вне изображения {self.width}x{self.height}")
        r, g, b, a = self.pil_image.getpixel((x, y))
        return int(r), int(g), int(b), int(a)

    def crop(self, left: int, top: int, right: int, bottom: int) -> "RasterImage":
        """Копия прямоугольника [left, right) x [top, bottom) без масштабирования."""
        region = self.pil_image.crop((left, top, right, bottom))
        return RasterImage.from_pil(region)

    def to_array(self) -> np.ndarray:
        """numpy-массив формы (height, width, 4), dtype uint8."""
        return np.asarray(self.pil_image, dtype=np.uint8)
