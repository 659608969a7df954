# core/config.py
from dataclasses import dataclass, replace
from typing import Optional

# Named quality levels: samples per pixel and maximum bounce depth.
QUALITY_LEVELS = {
    "interactive": {"samples_per_pixel": 1, "max_depth": 4},
    "balanced": {"samples_per_pixel": 16, "max_depth": 20},
    "high_quality": {"samples_per_pixel": 100, "max_depth": 50},
}

DEFAULT_QUALITY = "balanced"


@dataclass(frozen=True)
class RenderSettings:
    """
    Image size and sampling parameters for a render.

    ``seed`` of None draws a fresh seed per render; any integer makes the
    output reproducible regardless of ``workers``.
    """
    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 16
    max_depth: int = 20
    workers: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        if self.image_width <= 0:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_height <= 0:
            raise ValueError(
                f"image_width {self.image_width} with aspect_ratio {self.aspect_ratio} "
                f"gives an empty image"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    @property
    def image_height(self) -> int:
        return int(self.image_width / self.aspect_ratio)

    @classmethod
    def from_quality(cls, name: str, **overrides) -> "RenderSettings":
        if name not in QUALITY_LEVELS:
            known = ", ".join(sorted(QUALITY_LEVELS))
            raise ValueError(f"Unknown quality level {name!r} (known: {known})")
        params = dict(QUALITY_LEVELS[name])
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)

    def with_overrides(self, **overrides) -> "RenderSettings":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
