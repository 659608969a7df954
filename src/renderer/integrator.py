# renderer/integrator.py
import math
import random
from typing import Callable, Union
from core.ray import Ray
from core.vector import Color
from geometry.hittable import Hittable

# Hits closer than this are ignored so scattered rays do not re-hit their origin.
T_MIN = 0.001

Background = Union[Color, Callable[[Ray], Color]]

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)

def sky_gradient(ray: Ray) -> Color:
    """White-to-blue blend on the ray's vertical direction."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t

def background_color(background: Background, ray: Ray) -> Color:
    if callable(background):
        return background(ray)
    return background

def ray_color(ray: Ray, background: Background, world: Hittable,
              depth: int, rng: random.Random) -> Color:
    """
    Monte Carlo estimate of the light arriving along ``ray``.

    Follows one scatter path: emitted light at each hit plus the attenuated
    estimate for the scattered ray, until the path is absorbed, escapes to
    the background, or ``depth`` bounces are used up.
    """
    # Past the bounce limit no more light is gathered.
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return background_color(background, ray)

    emitted = rec.material.emitted(rec.u, rec.v, rec.p)
    scatter = rec.material.scatter(ray, rec, rng)
    if scatter is None:
        return emitted

    return emitted + scatter.attenuation * ray_color(scatter.scattered, background, world,
                                                     depth - 1, rng)
