"""Контроллер: оркестрация декодирования, обрезки, нарезки и сборки анимации.

SOLID:
- SRP: класс связывает сервисы и хранит текущее состояние (источник, сетка, кадры),
  но не содержит алгоритмов обработки изображений.
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
Clean Code:
- Методы компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from sprite_animator.models.animation_model import AnimationSettings
from sprite_animator.models.grid_model import DEFAULT_LAYOUT, FrameRecord, GridLayout, GridSpec
from sprite_animator.models.image_model import RasterImage
from sprite_animator.services.animation_service import AnimationService
from sprite_animator.services.frame_service import FrameService
from sprite_animator.services.image_service import ImageService
from sprite_animator.services.split_service import SplitService
from sprite_animator.services.trim_service import TrimService

logger = logging.getLogger(__name__)


@dataclass
class SplitController:
    """Связывает сервисы в конвейер «файл -> кадры -> анимация».

    Ответственности:
    - Загрузка исходного спрайт-листа через `ImageService`.
    - Обрезка полей (`TrimService`) и нарезка по сетке (`SplitService`).
    - Правка порядка кадров и экспорт (`FrameService`).
    - Сборка анимации (`AnimationService`).
    """
    max_workers: Optional[int] = None

    _image_service: ImageService = field(default_factory=ImageService)
    _trim_service: TrimService = field(default_factory=TrimService)
    _split_service: SplitService = field(default_factory=SplitService)
    _frame_service: FrameService = field(default_factory=FrameService)
    _animation_service: AnimationService = field(default_factory=AnimationService)

    _source: Optional[RasterImage] = None
    _spec: Optional[GridSpec] = None
    _frames: List[FrameRecord] = field(default_factory=list)

    # ---- State ----
    @property
    def source(self) -> Optional[RasterImage]:
        return self._source

    @property
    def spec(self) -> Optional[GridSpec]:
        return self._spec

    @property
    def frames(self) -> List[FrameRecord]:
        return list(self._frames)

    # ---- Loading ----
    def open_file(self, file_path: str | Path) -> RasterImage:
        """Загружает спрайт-лист с диска; предыдущие кадры сбрасываются."""
        image = self._image_service.load_image(file_path)
        self._set_source(image)
        logger.info("Открыт %s (%dx%d)", image.source, image.width, image.height)
        return image

    def open_bytes(self, data: bytes) -> RasterImage:
        image = self._image_service.decode_bytes(data)
        self._set_source(image)
        logger.info("Загружено изображение из байтов (%dx%d)", image.width, image.height)
        return image

    def _set_source(self, image: RasterImage) -> None:
        self._source = image
        self._spec = None
        self._frames = []

    def suggest_layout(self) -> GridLayout:
        """Подсказка сетки для текущего источника; без источника — раскладка по умолчанию."""
        if self._source is None:
            return DEFAULT_LAYOUT
        return self._split_service.suggest_layout(self._source.width, self._source.height)

    # ---- Splitting ----
    def split_image(self, image: RasterImage, spec: GridSpec) -> List[FrameRecord]:
        """Обрезка (если `spec.auto_trim`) и нарезка без изменения состояния контроллера.

        Обрезка полностью завершается до начала нарезки; результат обрезки —
        независимый растр.
        """
        spec.validate()
        prepared = self._trim_service.trim(image) if spec.auto_trim else image
        return self._split_service.slice(prepared, spec, max_workers=self.max_workers)

    def split(self, spec: GridSpec) -> List[FrameRecord]:
        """Нарезает текущий источник и запоминает кадры.

        Raises:
            RuntimeError: если источник не загружен.
            InvalidGeometry: если сетка не помещается в изображение.
        """
        source = self._require_source()
        frames = self.split_image(source, spec)
        self._spec = spec
        self._frames = frames
        logger.info("Сетка %dx%d -> %d кадров", spec.rows, spec.cols, len(frames))
        return self.frames

    # ---- Frame management ----
    def move_frame(self, index: int, direction: str) -> List[FrameRecord]:
        self._frames = self._frame_service.move_frame(self._frames, index, direction)
        return self.frames

    def delete_frame(self, index: int) -> List[FrameRecord]:
        self._frames = self._frame_service.delete_frame(self._frames, index)
        return self.frames

    def reverse_frames(self) -> List[FrameRecord]:
        self._frames = self._frame_service.reverse(self._frames)
        return self.frames

    def clear(self) -> None:
        self._frames = []

    # ---- Output ----
    def create_animation(self, settings: AnimationSettings = AnimationSettings()) -> bytes:
        return self._animation_service.build(self._require_frames(), settings)

    def save_animation(self, path: str | Path, settings: AnimationSettings = AnimationSettings()) -> Path:
        out = self._animation_service.save(self._require_frames(), settings, path)
        logger.info("Анимация сохранена: %s", out)
        return out

    def export_frames(self, directory: str | Path) -> List[Path]:
        paths = self._frame_service.export_frames(self._require_frames(), directory)
        logger.info("Кадры сохранены в %s (%d шт.)", directory, len(paths))
        return paths

    def export_zip(self, path: str | Path) -> Path:
        out = self._frame_service.export_zip(self._require_frames(), path)
        logger.info("Архив кадров сохранён: %s", out)
        return out

    def default_animation_name(self, settings: AnimationSettings = AnimationSettings()) -> str:
        return self._frame_service.animation_name(self._spec or DEFAULT_LAYOUT.to_spec(), settings.format)

    def default_zip_name(self) -> str:
        return self._frame_service.zip_name(self._spec or DEFAULT_LAYOUT.to_spec())

    # ---- Helpers ----
    def _require_source(self) -> RasterImage:
        if self._source is None:
            raise RuntimeError("Изображение не загружено")
        return self._source

    def _require_frames(self) -> List[FrameRecord]:
        if not self._frames:
            raise RuntimeError("Нет кадров: сначала выполните нарезку")
        return self._frames
