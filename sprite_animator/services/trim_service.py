"""Обрезка пустых полей (белых или прозрачных) вокруг спрайт-листа.

Принципы:
- SRP: только поиск рамки содержимого и вырезание по ней.
- Чистый код: входной растр не мутируется; при любой неоднозначности возвращается оригинал.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from sprite_animator.models.grid_model import BoundingBox
from sprite_animator.models.image_model import RasterImage

logger = logging.getLogger(__name__)

# alpha < 10 считается прозрачным фоном
ALPHA_THRESHOLD = 10
# R, G, B > 240 одновременно считается белым фоном (допуск на артефакты сжатия)
WHITE_THRESHOLD = 240


class TrimService:
    def content_mask(self, image: RasterImage) -> np.ndarray:
        """Булева маска (height, width): True там, где пиксель относится к содержимому.

        Фон: прозрачный (alpha < 10) ИЛИ почти белый (все каналы RGB > 240).
        """
        arr = image.to_array()
        rgb = arr[:, :, :3]
        alpha = arr[:, :, 3]
        transparent = alpha < ALPHA_THRESHOLD
        white = np.all(rgb > WHITE_THRESHOLD, axis=2)
        return ~(transparent | white)

    def find_content_box(self, image: RasterImage) -> Optional[BoundingBox]:
        """Минимальная рамка, содержащая все пиксели содержимого.

        Строки ищутся по всей ширине, столбцы — только в пределах [top, bottom).
        Возвращает None, если содержимого нет вовсе.
        """
        if image.width == 0 or image.height == 0:
            return None
        mask = self.content_mask(image)

        row_hits = np.flatnonzero(mask.any(axis=1))
        if row_hits.size == 0:
            return None
        top = int(row_hits[0])
        bottom = int(row_hits[-1]) + 1

        col_hits = np.flatnonzero(mask[top:bottom].any(axis=0))
        if col_hits.size == 0:
            return None
        left = int(col_hits[0])
        right = int(col_hits[-1]) + 1

        return BoundingBox(top=top, bottom=bottom, left=left, right=right)

    def trim(self, image: RasterImage) -> RasterImage:
        """Возвращает новый растр, обрезанный по рамке содержимого.

        Пустое изображение, рамка во всё изображение или вырожденная рамка —
        не ошибка: возвращается исходный объект без изменений.
        """
        box = self.find_content_box(image)
        if box is None:
            logger.debug("Содержимое не найдено, обрезка пропущена")
            return image
        if box.covers(image.width, image.height):
            return image
        if box.is_degenerate:
            logger.debug("Вырожденная рамка %s, возвращаем оригинал", box)
            return image

        logger.debug(
            "Обрезка %dx%d -> %dx%d (left=%d, top=%d)",
            image.width, image.height, box.width, box.height, box.left, box.top,
        )
        return image.crop(*box.as_crop_box())
