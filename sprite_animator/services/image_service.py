"""Декодирование и кодирование изображений.

Принципы:
- SRP: класс отвечает только за преобразование байты/файл <-> `RasterImage`.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- LSP/ISP: возвращает `RasterImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from sprite_animator.models.errors import DecodeFailure
from sprite_animator.models.grid_model import FrameRecord
from sprite_animator.models.image_model import RasterImage

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> RasterImage:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `RasterImage` (в режиме RGBA) с размерами, путём и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            DecodeFailure: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as pil_image:
                pil_image.load()
                rgba = pil_image.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise DecodeFailure(f"Файл не является изображением: {path}") from exc

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.debug("Загружено %s: %dx%d", path, rgba.width, rgba.height)
        return RasterImage.from_pil(rgba, source=path, size_bytes=size_bytes)

    def decode_bytes(self, data: bytes) -> RasterImage:
        """Декодирует изображение из байтов (например, загруженного файла).

        Raises:
            DecodeFailure: если данные пусты или не являются изображением.
        """
        if not data:
            raise DecodeFailure("Пустые данные изображения")
        try:
            with Image.open(io.BytesIO(data)) as pil_image:
                pil_image.load()
                rgba = pil_image.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise DecodeFailure("Данные не являются изображением") from exc
        return RasterImage.from_pil(rgba, size_bytes=len(data))

    def encode_png(self, image: RasterImage | Image.Image) -> bytes:
        """PNG без потерь с сохранением альфа-канала."""
        pil_image = image.pil_image if isinstance(image, RasterImage) else image
        buffer = io.BytesIO()
        pil_image.save(buffer, format="PNG")
        return buffer.getvalue()

    def decode_frame(self, record: FrameRecord) -> RasterImage:
        """Обратное преобразование кадра в растр (для анимации и экспорта)."""
        return self.decode_bytes(record.image)
