# src/geometry/world.py
import random
from typing import Iterable, List, Optional
from core.aabb import AABB
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class HittableList(Hittable):
    """
    An ordered list of Hittable objects, searched linearly. Wrap it with
    ``build_bvh()`` for anything but small scenes.
    """
    def __init__(self, objects: Iterable[Hittable] = ()):
        self.objects: List[Hittable] = list(objects)

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def build_bvh(self, time0: float = 0.0, time1: float = 0.0,
                  rng: Optional[random.Random] = None):
        """
        Builds a BVH over a copy of the current objects and returns its root.
        """
        from geometry.bvh import BVHNode
        return BVHNode.from_list(self, time0, time1, rng)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        if not self.objects:
            return None
        output_box = None
        for obj in self.objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                return None
            output_box = box if output_box is None else AABB.surrounding_box(output_box, box)
        return output_box
