#!/usr/bin/env python3
"""Render a JSON scene file to a PNG image.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene SCENE       Scene file path (default: scenes/test.json)
    --output OUTPUT     Output file path (default: image.png)
    --workers WORKERS   Render threads (default: number of CPUs)
    --arch {cpu,gpu}    Taichi backend for ray generation (default: cpu)
    --gamma GAMMA       Gamma encoding exponent (default: 1.0)
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --scene scenes/test.json --output test.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a JSON scene file with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default="scenes/test.json",
        help="Scene file path (default: scenes/test.json)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.png",
        help="Output file path (default: image.png)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render threads (default: number of CPUs)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend for ray generation (default: cpu)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma encoding exponent (default: 1.0)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene_path: str = "scenes/test.json",
    output_path: str = "image.png",
    workers: int | None = None,
    gamma: float = 1.0,
    quiet: bool = False,
) -> Path:
    """Render a scene file and save the result.

    Args:
        scene_path: JSON scene file to render.
        output_path: Output file path (PNG).
        workers: Number of render threads, or None for one per CPU.
        gamma: Gamma encoding exponent applied on export.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.preview.export import save_png
    from whitted.scene.loader import load_scene

    start_time = time.time()
    scene = load_scene(scene_path)
    camera = scene.camera

    if not quiet:
        print(
            f"Loaded {scene_path}: {len(scene.world.objects)} objects, "
            f"{len(scene.world.lights)} lights"
        )
        print(f"Rendering {camera.hsize}x{camera.vsize}...")

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    image = camera.render(scene.world, workers=workers, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(image, output_file, gamma=gamma)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Rendered {scene_path} in {total_time * 1000.0:.0f} milliseconds")
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Ray generation runs in float64
    if args.arch == "gpu":
        try:
            ti.init(arch=ti.gpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using CPU backend")
    else:
        ti.init(arch=ti.cpu, default_fp=ti.f64)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_scene(
            scene_path=args.scene,
            output_path=args.output,
            workers=args.workers,
            gamma=args.gamma,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
