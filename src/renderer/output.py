# renderer/output.py
import logging
import os
from typing import TextIO
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

PPM_MAX_VALUE = 255

def to_rgb8(accumulated: np.ndarray, samples_per_pixel: int) -> np.ndarray:
    """
    Convert per-pixel sample sums into displayable 8-bit color.

    Averages the samples, applies gamma 2 (square root), clamps each channel
    to [0, 0.999] and scales to [0, 256), truncating to integers. NaN samples
    come out black; infinities clamp like any other out-of-range value.
    """
    scaled = np.asarray(accumulated, dtype=np.float64) * (1.0 / samples_per_pixel)

    nan = np.isnan(scaled)
    if nan.any():
        logger.warning("Replacing %d NaN color channel(s) with black", int(nan.sum()))
        scaled = np.where(nan, 0.0, scaled)

    mapped = np.sqrt(np.clip(scaled, 0.0, None))
    mapped = np.clip(mapped, 0.0, 0.999)
    return (256 * mapped).astype(np.uint8)

def write_ppm(stream: TextIO, pixels: np.ndarray):
    """
    Write an (H, W, 3) uint8 image as plain-text PPM, top row first.
    """
    height, width = pixels.shape[:2]
    stream.write(f"P3\n{width} {height}\n{PPM_MAX_VALUE}\n")
    for row in pixels:
        stream.write("".join(f"{int(r)} {int(g)} {int(b)}\n" for r, g, b in row))

def save_image(path: str, pixels: np.ndarray):
    """
    Save the image to ``path``: ``.ppm`` as plain-text PPM, anything else
    through Pillow (format chosen from the extension).
    """
    if os.path.splitext(path)[1].lower() == ".ppm":
        with open(path, "w", encoding="ascii") as f:
            write_ppm(f, pixels)
    else:
        Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(path)
    logger.info("Wrote %dx%d image to %s", pixels.shape[1], pixels.shape[0], path)
