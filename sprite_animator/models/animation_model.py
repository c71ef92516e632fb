"""Параметры сборки анимации из последовательности кадров."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AnimationFormat(str, Enum):
    GIF = "gif"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class AnimationSettings:
    """Настройки анимации.

    Fields:
        interval: Длительность одного кадра, секунды.
        width: Ширина холста анимации, px.
        height: Высота холста анимации, px.
        quality: 1..10, где 1 — лучшее качество (больше цветов палитры GIF).
        format: Формат результата.
        loop: Число повторов; 0 — бесконечно.
    """
    interval: float = 0.3
    width: int = 400
    height: int = 400
    quality: int = 10
    format: AnimationFormat = AnimationFormat.GIF
    loop: int = 0

    @property
    def duration_ms(self) -> int:
        return int(round(self.interval * 1000))

    def validate(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"Интервал кадра должен быть > 0, получено {self.interval}")
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Размер анимации должен быть >= 1x1, получено {self.width}x{self.height}")
        if not 1 <= self.quality <= 10:
            raise ValueError(f"Качество должно быть в диапазоне 1..10, получено {self.quality}")
        if self.loop < 0:
            raise ValueError(f"loop не может быть отрицательным: {self.loop}")
