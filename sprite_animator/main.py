"""Точка входа: нарезка спрайт-листа и сборка анимации из командной строки."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sprite_animator.controllers.split_controller import SplitController
from sprite_animator.models.animation_model import AnimationFormat, AnimationSettings
from sprite_animator.models.grid_model import GridSpec

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    defaults = AnimationSettings()
    parser = argparse.ArgumentParser(
        prog="sprite-animator",
        description="Нарезка спрайт-листа по сетке и сборка зацикленной анимации.",
    )
    parser.add_argument("sheet", type=Path, help="Файл спрайт-листа")
    parser.add_argument("--rows", type=int, help="Строк сетки (по умолчанию — подсказка по пропорциям)")
    parser.add_argument("--cols", type=int, help="Столбцов сетки (по умолчанию — подсказка по пропорциям)")
    parser.add_argument("--padding-x", type=int, default=0)
    parser.add_argument("--padding-y", type=int, default=0)
    parser.add_argument("--no-trim", action="store_true", help="Не обрезать пустые поля")
    parser.add_argument("--suggest", action="store_true", help="Только вывести подсказку сетки")
    parser.add_argument("--frames-dir", type=Path, help="Каталог для frame_N.png")
    parser.add_argument("--zip", type=Path, help="ZIP-архив с кадрами")
    parser.add_argument("-o", "--output", type=Path, help="Файл анимации")
    parser.add_argument(
        "--format",
        choices=[f.value for f in AnimationFormat],
        default=defaults.format.value,
    )
    parser.add_argument("--interval", type=float, default=defaults.interval, help="Секунд на кадр")
    parser.add_argument("--width", type=int, default=defaults.width)
    parser.add_argument("--height", type=int, default=defaults.height)
    parser.add_argument("--quality", type=int, default=defaults.quality, help="1 (лучше) .. 10")
    parser.add_argument("--workers", type=int, help="Потоков для нарезки ячеек")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Выполняет CLI и возвращает код завершения."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    controller = SplitController(max_workers=args.workers)
    settings = AnimationSettings(
        interval=args.interval,
        width=args.width,
        height=args.height,
        quality=args.quality,
        format=AnimationFormat(args.format),
    )
    try:
        settings.validate()
        controller.open_file(args.sheet)
        suggestion = controller.suggest_layout()
        if args.suggest:
            print(f"{suggestion.rows}x{suggestion.cols}")
            return 0

        spec = GridSpec(
            rows=args.rows if args.rows is not None else suggestion.rows,
            cols=args.cols if args.cols is not None else suggestion.cols,
            padding_x=args.padding_x,
            padding_y=args.padding_y,
            auto_trim=not args.no_trim,
        )
        controller.split(spec)
    except (FileNotFoundError, ValueError) as exc:
        # DecodeFailure и InvalidGeometry — подклассы ValueError
        logger.error("%s", exc)
        return EXIT_INPUT_ERROR

    if args.frames_dir is not None:
        controller.export_frames(args.frames_dir)
    if args.zip is not None:
        controller.export_zip(args.zip)

    if args.output is not None or (args.frames_dir is None and args.zip is None):
        output = args.output or Path(controller.default_animation_name(settings))
        controller.save_animation(output, settings)
    return 0


def main() -> None:
    """Запускает CLI и завершает процесс с его кодом."""
    sys.exit(run())


if __name__ == "__main__":
    main()
