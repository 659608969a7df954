# materials/textures.py
import math
import random
from typing import Optional, Union
import numpy as np
from core.vector import Color, Point3
from core.utils import clamp
from materials.perlin import Perlin

class Texture:
    """Base class for all textures: a color as a function of (u, v, p)."""
    def value(self, u: float, v: float, p: Point3) -> Color:
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Point3) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color!r})"

def as_texture(albedo: Union[Color, Texture]) -> Texture:
    if isinstance(albedo, Texture):
        return albedo
    return SolidColor(albedo)

class CheckerTexture(Texture):
    """
    A checker pattern in 3D space: the sign of sin(10x)·sin(10y)·sin(10z)
    picks between two sub-textures.
    """
    def __init__(self, even: Union[Color, Texture], odd: Union[Color, Texture]):
        self.even = as_texture(even)
        self.odd = as_texture(odd)

    def value(self, u: float, v: float, p: Point3) -> Color:
        sines = math.sin(10 * p.x) * math.sin(10 * p.y) * math.sin(10 * p.z)
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)

class NoiseTexture(Texture):
    """
    Perlin noise texture.

    ``mode`` selects the look:
      - "noise": 0.5·(1 + noise(scale·p))
      - "turbulence": turbulence(scale·p)
      - "marble": 0.5·(1 + sin(scale·z + 10·turbulence(p)))
    """
    NOISE = "noise"
    TURBULENCE = "turbulence"
    MARBLE = "marble"
    MODES = (NOISE, TURBULENCE, MARBLE)

    def __init__(self, scale: float = 1.0, mode: str = MARBLE,
                 rng: Optional[random.Random] = None, depth: int = 7):
        if mode not in self.MODES:
            raise ValueError(f"Unknown noise mode {mode!r} (expected one of {self.MODES})")
        self.noise = Perlin(rng)
        self.scale = scale
        self.mode = mode
        self.depth = depth

    def value(self, u: float, v: float, p: Point3) -> Color:
        if self.mode == self.NOISE:
            n = 0.5 * (1.0 + self.noise.noise(p * self.scale))
        elif self.mode == self.TURBULENCE:
            n = self.noise.turbulence(p * self.scale, self.depth)
        else:
            n = 0.5 * (1.0 + math.sin(self.scale * p.z + 10 * self.noise.turbulence(p, self.depth)))
        return Color(n, n, n)

class ImageTexture(Texture):
    """
    A texture sampled from a decoded RGB image, nearest neighbour.

    ``data`` is a (height, width, 3) uint8 array with row 0 at the top.
    """
    def __init__(self, data: np.ndarray):
        if data.ndim != 3 or data.shape[2] < 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Expected a non-empty (height, width, 3) image, got shape {data.shape}")
        self.data = np.ascontiguousarray(data[:, :, :3])
        self.height, self.width = self.data.shape[:2]

    @classmethod
    def from_file(cls, image_path: str) -> "ImageTexture":
        from materials.texture_loader import load_image
        return cls(load_image(image_path))

    def value(self, u: float, v: float, p: Point3) -> Color:
        # Clamp input texture coordinates to [0,1] x [1,0]
        u = clamp(u, 0.0, 1.0)
        v = 1.0 - clamp(v, 0.0, 1.0)  # Flip V to image row order

        i = min(int(u * self.width), self.width - 1)
        j = min(int(v * self.height), self.height - 1)

        scale = 1.0 / 255.0
        pixel = self.data[j, i]
        return Color(float(pixel[0]) * scale, float(pixel[1]) * scale, float(pixel[2]) * scale)
