"""Редактирование последовательности кадров и экспорт на диск.

Все операции над списком возвращают новый список; входной не мутируется.
"""
from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import List, Sequence

from sprite_animator.models.animation_model import AnimationFormat
from sprite_animator.models.grid_model import FrameRecord, GridSpec

logger = logging.getLogger(__name__)


class FrameService:
    # ---------- Порядок кадров ----------
    def move_frame(self, frames: Sequence[FrameRecord], index: int, direction: str) -> List[FrameRecord]:
        """Меняет кадр местами с соседом слева ("left") или справа ("right").

        Если соседа нет, возвращается копия без изменений.
        """
        if direction not in ("left", "right"):
            raise ValueError(f"Неизвестное направление: {direction!r}")
        result = list(frames)
        target = index - 1 if direction == "left" else index + 1
        if not (0 <= index < len(result)) or not (0 <= target < len(result)):
            return result
        result[index], result[target] = result[target], result[index]
        return result

    def delete_frame(self, frames: Sequence[FrameRecord], index: int) -> List[FrameRecord]:
        return [f for i, f in enumerate(frames) if i != index]

    def reverse(self, frames: Sequence[FrameRecord]) -> List[FrameRecord]:
        return list(reversed(frames))

    # ---------- Экспорт ----------
    def export_frames(self, frames: Sequence[FrameRecord], directory: str | Path) -> List[Path]:
        """Записывает кадры как frame_1.png … frame_N.png."""
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for index, frame in enumerate(frames):
            path = out_dir / FrameRecord.filename(index)
            path.write_bytes(frame.image)
            paths.append(path)
        logger.debug("Экспортировано %d кадров в %s", len(paths), out_dir)
        return paths

    def export_zip(self, frames: Sequence[FrameRecord], path: str | Path) -> Path:
        """Упаковывает кадры в ZIP с теми же именами, что и `export_frames`."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(out, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for index, frame in enumerate(frames):
                archive.writestr(FrameRecord.filename(index), frame.image)
        return out

    # ---------- Имена файлов ----------
    def zip_name(self, spec: GridSpec) -> str:
        return f"frames_{spec.rows}x{spec.cols}.zip"

    def animation_name(self, spec: GridSpec, fmt: AnimationFormat = AnimationFormat.GIF) -> str:
        return f"animation_{spec.rows}x{spec.cols}.{fmt.extension}"
