"""Нарезка спрайт-листа на кадры по сетке.

Принципы:
- SRP: геометрия ячеек и вырезание; обрезка полей — в `TrimService`, оркестрация — в контроллере.
- Чистый код: функция чистая, исходный растр не мутируется, кадры создаются заново на каждый вызов.
"""
from __future__ import annotations

import logging
import math
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional, Tuple

from sprite_animator.models.errors import InvalidGeometry
from sprite_animator.models.grid_model import (
    CellGeometry,
    FramePosition,
    FrameRecord,
    GridLayout,
    GridSpec,
)
from sprite_animator.models.image_model import RasterImage
from sprite_animator.services.image_service import ImageService

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    # Math.round: .5 округляется вверх (round() в Python — банковское)
    return int(math.floor(value + 0.5))


class SplitService:
    def __init__(self, image_service: Optional[ImageService] = None) -> None:
        self._image_service = image_service or ImageService()

    # ---------- Геометрия ----------
    def compute_geometry(self, width: int, height: int, spec: GridSpec) -> CellGeometry:
        """Размер ячейки с учётом отступов до первой, между и после последней ячейки.

        cell_width = floor((width - padding_x * (cols + 1)) / cols)
        cell_height = floor((height - padding_y * (rows + 1)) / rows)

        Raises:
            InvalidGeometry: rows/cols < 1 или размер ячейки <= 0.
        """
        spec.validate()
        cell_width = (width - spec.padding_x * (spec.cols + 1)) // spec.cols
        cell_height = (height - spec.padding_y * (spec.rows + 1)) // spec.rows
        if cell_width <= 0 or cell_height <= 0:
            raise InvalidGeometry(
                f"Ячейка {cell_width}x{cell_height} для сетки {spec.rows}x{spec.cols} "
                f"на изображении {width}x{height} (отступы {spec.padding_x}, {spec.padding_y})",
                rows=spec.rows,
                cols=spec.cols,
                cell_width=cell_width,
                cell_height=cell_height,
            )
        return CellGeometry(
            cell_width=cell_width,
            cell_height=cell_height,
            padding_x=spec.padding_x,
            padding_y=spec.padding_y,
        )

    def iter_cells(
        self, geometry: CellGeometry, spec: GridSpec
    ) -> Iterator[Tuple[FramePosition, Tuple[int, int, int, int]]]:
        """Позиции и рамки ячеек в построчном порядке (row-major)."""
        for row in range(spec.rows):
            for col in range(spec.cols):
                yield FramePosition(row=row, col=col), geometry.box(row, col)

    # ---------- Нарезка ----------
    def slice(
        self,
        image: RasterImage,
        spec: GridSpec,
        max_workers: Optional[int] = None,
    ) -> List[FrameRecord]:
        """Разрезает изображение на rows * cols кадров одинакового размера.

        Args:
            image: Исходный (или уже обрезанный) растр.
            spec: Сетка; `auto_trim` здесь не учитывается.
            max_workers: Если > 1, ячейки вырезаются и кодируются в пуле потоков.

        Returns:
            Список `FrameRecord` в порядке (0,0), (0,1), …, (rows-1, cols-1).

        Raises:
            InvalidGeometry: если сетка не помещается в изображение.
        """
        geometry = self.compute_geometry(image.width, image.height, spec)
        logger.debug(
            "Сетка %dx%d, ячейка %dx%d, источник %dx%d",
            spec.rows, spec.cols, geometry.cell_width, geometry.cell_height,
            image.width, image.height,
        )
        cells = list(self.iter_cells(geometry, spec))

        if max_workers is not None and max_workers > 1 and len(cells) > 1:
            # ячейки независимы и только читают исходный растр
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                return list(pool.map(lambda cell: self._extract(image, *cell), cells))
        return [self._extract(image, position, box) for position, box in cells]

    def _extract(
        self,
        image: RasterImage,
        position: FramePosition,
        box: Tuple[int, int, int, int],
    ) -> FrameRecord:
        left, top, right, bottom = box
        cell = image.pil_image.crop(box)
        return FrameRecord(
            id=uuid.uuid4().hex,
            image=self._image_service.encode_png(cell),
            position=position,
            width=right - left,
            height=bottom - top,
        )

    # ---------- Подсказка раскладки ----------
    def suggest_layout(self, width: int, height: int) -> GridLayout:
        """Эвристика по соотношению сторон; результат лишь рекомендация.

        r > 2.5 -> 1 x round(r); r < 0.4 -> round(1/r) x 1; r > 1.5 -> 2x3;
        r < 0.75 -> 3x2; иначе 2x2.
        """
        if width <= 0 or height <= 0:
            raise InvalidGeometry(f"Некорректный размер изображения: {width}x{height}")
        ratio = width / height

        if ratio > 2.5:
            return GridLayout(rows=1, cols=max(1, _round_half_up(ratio)))
        if ratio < 0.4:
            return GridLayout(rows=max(1, _round_half_up(1 / ratio)), cols=1)
        if ratio > 1.5:
            return GridLayout(rows=2, cols=3)
        if ratio < 0.75:
            return GridLayout(rows=3, cols=2)
        return GridLayout(rows=2, cols=2)
