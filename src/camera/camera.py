# camera/camera.py
import math
import random
from core.vector import Vector3, Point3
from core.ray import Ray
from core.utils import degrees_to_radians, random_in_unit_disk

class Camera:
    """
    Thin-lens camera with depth of field and a shutter interval for motion blur.

    Args:
        lookfrom: Camera position.
        lookat: Point the camera looks toward.
        vup: World "up" used to orient the view.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Image width over height.
        aperture: Lens diameter; 0 gives a pinhole camera.
        focus_dist: Distance to the plane in perfect focus.
        time0, time1: Shutter open/close times.
    """
    def __init__(self, lookfrom: Point3, lookat: Point3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0, time0: float = 0.0, time1: float = 0.0):
        self.lookfrom = lookfrom
        self.lookat = lookat
        self.vup = vup
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.time0 = time0
        self.time1 = time1
        self.lens_radius = aperture / 2.0
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = self.lookfrom
        # Scale by focus distance
        self.horizontal = self.u * viewport_width * self.focus_dist
        self.vertical = self.v * viewport_height * self.focus_dist
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * self.focus_dist)

    def get_ray(self, s: float, t: float, rng: random.Random) -> Ray:
        """Generates a ray through normalized image coordinates (s, t)."""
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        return Ray(ray_origin, ray_direction, rng.uniform(self.time0, self.time1))
