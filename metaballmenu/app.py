"""
Application entry point — CLI parsing, dependency checks, offscreen render.

Lays out a row of menu items, runs one selector transition and writes
every frame as a PNG.
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__


def _check_deps() -> list:
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_color(text: str) -> tuple:
    value = text.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Colour must look like #rrggbb, got '{text}'")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="metaballmenu",
        description="Metaball menu — render a selector transition frame by frame.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                              # 4 items, first → last\n"
            "  %(prog)s --items 5 --to 2 --fps 120    # smoother, to the middle\n"
            "  %(prog)s --backend numpy --color #ff8800\n"
            "  %(prog)s -v                            # verbose logging\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--items", type=int, default=4, help="Number of menu items (2–12, default 4)")
    p.add_argument("--from", dest="origin", type=int, default=0, help="Index selected first")
    p.add_argument("--to", dest="target", type=int, default=None, help="Index to move to (default last)")
    p.add_argument("--spacing", type=float, default=72.0, help="Distance between item centers (px)")
    p.add_argument("--size", type=float, default=24.0, help="Item icon size (px)")
    p.add_argument("--padding", type=float, default=8.0, help="Space around the icon (px)")
    p.add_argument("--duration", type=float, default=0.5, help="Transition length in seconds")
    p.add_argument("--fps", type=int, default=60, help="Frames per second")
    p.add_argument("--backend", choices=("qt", "numpy"), default="qt", help="Renderer")
    p.add_argument("--color", type=str, default="#ffffff", help="Blob colour (#rrggbb)")
    p.add_argument("--out", type=Path, default=Path("frames"), help="Output directory")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def render_frames(
    item_count: int,
    origin: int,
    target: int,
    spacing: float,
    radius: float,
    duration: float,
    fps: int,
    backend: str,
    color: tuple,
    out_dir: Path,
) -> List[Path]:
    """Run one transition and save each frame; returns the written paths."""
    from .geometry import Point
    from .qt_render import array_to_qimage, render_image
    from .raster import rasterize
    from .transition import MenuSelector, TransitionParams

    logger = logging.getLogger("metaballmenu")

    width = int(math.ceil(spacing * item_count))
    height = int(math.ceil(spacing))
    centers = [Point(spacing * (i + 0.5), spacing / 2.0) for i in range(item_count)]
    selector = MenuSelector(
        centers, radius,
        params=TransitionParams(duration=duration),
        selected=origin,
    )
    selector.add_listener(lambda i: logger.info("Item %d selected", i))
    selector.select(target)

    out_dir.mkdir(parents=True, exist_ok=True)
    dt = 1.0 / fps
    written: List[Path] = []
    frame = 0
    while True:
        animating = selector.animating
        commands = selector.step(dt if frame else 0.0)
        if backend == "numpy":
            img = array_to_qimage(rasterize(commands, width, height, color))
        else:
            img = render_image(commands, width, height, color)
        path = out_dir / f"frame_{frame:03d}.png"
        if not img.save(str(path)):
            raise OSError(f"Failed to save {path}")
        written.append(path)
        frame += 1
        if not animating:
            break

    logger.info("Wrote %d frames to %s", len(written), out_dir)
    return written


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("metaballmenu")

    # Dependency check
    missing = _check_deps()
    if missing:
        print(f"ERROR: Missing packages: {', '.join(missing)}\n"
              f"Install: pip install {' '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    # Validate
    if not (2 <= args.items <= 12):
        print("ERROR: --items must be 2–12.", file=sys.stderr)
        sys.exit(1)

    target = args.items - 1 if args.target is None else args.target
    for name, idx in (("--from", args.origin), ("--to", target)):
        if not (0 <= idx < args.items):
            print(f"ERROR: {name} must be between 0 and {args.items - 1}.", file=sys.stderr)
            sys.exit(1)

    if args.fps <= 0 or args.duration <= 0 or args.spacing <= 0:
        print("ERROR: --fps, --duration and --spacing must be positive.", file=sys.stderr)
        sys.exit(1)

    try:
        color = _parse_color(args.color)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    from .transition import selector_radius
    try:
        radius = selector_radius(args.size, args.size, args.padding)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    logger.info("Starting Metaball Menu v%s", __version__)
    logger.info("Items: %d, %d → %d, radius %.1f px, backend %s",
                args.items, args.origin, target, radius, args.backend)

    # Offscreen Qt; nothing is shown on screen
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt5.QtGui import QGuiApplication

    app = QGuiApplication.instance() or QGuiApplication(sys.argv[:1])
    app.setApplicationName("Metaball Menu")
    app.setApplicationVersion(__version__)

    try:
        render_frames(
            args.items, args.origin, target, args.spacing, radius,
            args.duration, args.fps, args.backend, color, args.out,
        )
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
