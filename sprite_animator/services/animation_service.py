"""Сборка зацикленной анимации (GIF / WebP) из упорядоченных кадров."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from PIL import Image, ImageOps

from sprite_animator.models.animation_model import AnimationFormat, AnimationSettings
from sprite_animator.models.grid_model import FrameRecord
from sprite_animator.models.image_model import RasterImage
from sprite_animator.services.image_service import ImageService

logger = logging.getLogger(__name__)

FrameLike = Union[FrameRecord, RasterImage]


def palette_colors(quality: int) -> int:
    """Размер палитры GIF: quality 1 -> 256 цветов, quality 10 -> 64 цвета."""
    quality = min(10, max(1, int(quality)))
    return 256 - round((quality - 1) * 192 / 9)


class AnimationService:
    def __init__(self, image_service: Optional[ImageService] = None) -> None:
        self._image_service = image_service or ImageService()

    def _to_pil(self, frame: FrameLike) -> Image.Image:
        if isinstance(frame, FrameRecord):
            return self._image_service.decode_frame(frame).pil_image
        return frame.pil_image

    def fit_frame(self, image: Image.Image, width: int, height: int) -> Image.Image:
        """Вписывает кадр в холст width x height с сохранением пропорций, по центру."""
        fitted = ImageOps.contain(image, (width, height))
        canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        offset = ((width - fitted.width) // 2, (height - fitted.height) // 2)
        canvas.paste(fitted, offset)
        return canvas

    def prepare_frames(self, frames: Sequence[FrameLike], settings: AnimationSettings) -> List[Image.Image]:
        prepared = [self.fit_frame(self._to_pil(f), settings.width, settings.height) for f in frames]
        if settings.format is AnimationFormat.GIF:
            colors = palette_colors(settings.quality)
            prepared = [
                f.quantize(colors=colors, method=Image.Quantize.FASTOCTREE).convert("RGBA")
                for f in prepared
            ]
        return prepared

    def build(self, frames: Sequence[FrameLike], settings: AnimationSettings = AnimationSettings()) -> bytes:
        """Кодирует кадры в одну зацикленную анимацию и возвращает её байты.

        Raises:
            ValueError: если кадров нет или настройки некорректны.
        """
        if not frames:
            raise ValueError("Нет кадров для анимации")
        settings.validate()

        images = self.prepare_frames(frames, settings)
        save_kwargs = dict(
            save_all=True,
            append_images=images[1:],
            duration=settings.duration_ms,
            loop=settings.loop,
            disposal=2,
        )
        if settings.format is AnimationFormat.WEBP:
            save_kwargs["lossless"] = True

        buffer = io.BytesIO()
        images[0].save(buffer, format=settings.format.value.upper(), **save_kwargs)
        logger.debug(
            "Анимация %s: %d кадров, %dx%d, %d мс/кадр",
            settings.format.value, len(images), settings.width, settings.height, settings.duration_ms,
        )
        return buffer.getvalue()

    def save(self, frames: Sequence[FrameLike], settings: AnimationSettings, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.build(frames, settings))
        return out
