# materials/presets.py
import random
from typing import Optional
from core.vector import Color
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.textures import CheckerTexture, NoiseTexture

class ColorPresets:
    """Colors used across the journal's scenes."""

    RED = Color(0.65, 0.05, 0.05)
    GREEN = Color(0.12, 0.45, 0.15)
    WHITE = Color(0.73, 0.73, 0.73)
    CHECKER_GREEN = Color(0.2, 0.3, 0.1)
    CHECKER_WHITE = Color(0.9, 0.9, 0.9)
    GROUND = Color(0.48, 0.83, 0.53)
    SKY = Color(0.70, 0.80, 1.00)
    BLACK = Color(0.0, 0.0, 0.0)

    @staticmethod
    def matte(color: Color) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(0.8, 0.6, 0.2), fuzz=0.0)

    @staticmethod
    def brushed(fuzz: float = 1.0) -> Metal:
        return Metal(Color(0.8, 0.8, 0.9), fuzz=fuzz)

class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

class LightPresets:
    """Predefined light sources."""

    @staticmethod
    def white(intensity: float = 1.0) -> DiffuseLight:
        return DiffuseLight(Color(1.0, 1.0, 1.0) * intensity)

class TexturePresets:
    """Predefined texture presets."""

    @staticmethod
    def checkerboard(even: Optional[Color] = None, odd: Optional[Color] = None) -> CheckerTexture:
        """Create a 3D checker texture with default or custom colors."""
        if even is None:
            even = ColorPresets.CHECKER_WHITE
        if odd is None:
            odd = ColorPresets.CHECKER_GREEN
        return CheckerTexture(even, odd)

    @staticmethod
    def marble(scale: float = 4.0, rng: Optional[random.Random] = None) -> NoiseTexture:
        """Create a marble texture with the given scale."""
        return NoiseTexture(scale, NoiseTexture.MARBLE, rng)
