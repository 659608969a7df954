# main.py
"""
Command-line entry point: build one of the journal's scenes, render it and
write the image.

Example:
    rt-journal --scene cornell_box --width 300 --samples 200 -o cornell.png
"""
import argparse
import logging
import random
import sys
from typing import List, Optional
from core.config import DEFAULT_QUALITY, QUALITY_LEVELS, RenderSettings
from renderer.output import save_image, write_ppm
from renderer.raytracer import Renderer
from scenes.library import SCENES, build_scene

logger = logging.getLogger("rt_journal")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def setup_logging(level: str = "INFO"):
    """Send log records to stderr so stdout stays free for image data."""
    logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))

def scanline_progress(remaining: int):
    sys.stderr.write(f"\rScanlines remaining: {remaining} ")
    if remaining == 0:
        sys.stderr.write("\nDone.\n")
    sys.stderr.flush()

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a scene from the ray tracing journal.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="random",
                        help="Scene to render (default: random)")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default=DEFAULT_QUALITY,
                        help=f"Sampling preset (default: {DEFAULT_QUALITY})")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument("--aspect-ratio", type=float, default=None,
                        help="Width over height (default: the scene's own)")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel (overrides --quality)")
    parser.add_argument("--depth", type=int, default=None,
                        help="Maximum bounce depth (overrides --quality)")
    parser.add_argument("--workers", type=int, default=1,
                        help="Worker processes for rendering rows (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible render")
    parser.add_argument("--texture", default=None,
                        help="Image file for the earth texture (earth and final scenes)")
    parser.add_argument("-o", "--output", default=None,
                        help="Output file (.ppm, .png, ...); PPM to stdout when omitted")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--quiet", action="store_true", help="Suppress the scanline counter")
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    rng = random.Random(args.seed)
    try:
        scene = build_scene(args.scene, args.aspect_ratio, rng, args.texture)
        settings = RenderSettings.from_quality(
            args.quality,
            image_width=args.width,
            aspect_ratio=scene.aspect_ratio,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            workers=args.workers,
            seed=args.seed,
        )
    except (ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 2

    renderer = Renderer(settings)
    progress = None if args.quiet else scanline_progress
    pixels = renderer.render_image(scene.world, scene.camera, scene.background, progress)

    if args.output is None:
        write_ppm(sys.stdout, pixels)
        sys.stdout.flush()
    else:
        save_image(args.output, pixels)
    return 0

if __name__ == "__main__":
    sys.exit(main())
