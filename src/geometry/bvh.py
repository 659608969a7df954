# src/geometry/bvh.py
import logging
import random
from typing import List, Optional
from core.aabb import AABB
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)

# How the split axis is chosen at each node.
SPLIT_RANDOM = "random"
SPLIT_LONGEST = "longest"

class BVHConstructionError(ValueError):
    """Raised when a BVH cannot be built over the given objects."""

def _box_of(obj: Hittable, time0: float, time1: float) -> AABB:
    box = obj.bounding_box(time0, time1)
    if box is None:
        raise BVHConstructionError(f"No bounding box for {obj!r}; it cannot be placed in a BVH")
    return box

class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy node.

    Built recursively over ``objects[start:end]``: pick a split axis, sort the
    span by box minimum on that axis and split at the midpoint. A span of one
    object stores it as both children.
    """
    def __init__(self, objects: List[Hittable], start: int, end: int,
                 time0: float = 0.0, time1: float = 0.0,
                 rng: Optional[random.Random] = None, split: str = SPLIT_RANDOM):
        if rng is None:
            rng = random.Random()
        object_span = end - start
        if object_span <= 0:
            raise BVHConstructionError("Cannot build a BVH over an empty object list")

        boxes = {id(objects[i]): _box_of(objects[i], time0, time1) for i in range(start, end)}
        axis = self._choose_axis(objects, start, end, boxes, rng, split)

        def key(obj):
            return boxes[id(obj)].minimum[axis]

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            if key(objects[start]) <= key(objects[start + 1]):
                self.left, self.right = objects[start], objects[start + 1]
            else:
                self.left, self.right = objects[start + 1], objects[start]
        else:
            objects[start:end] = sorted(objects[start:end], key=key)
            mid = start + object_span // 2
            self.left = BVHNode(objects, start, mid, time0, time1, rng, split)
            self.right = BVHNode(objects, mid, end, time0, time1, rng, split)

        self.box = AABB.surrounding_box(_box_of(self.left, time0, time1),
                                        _box_of(self.right, time0, time1))

    @staticmethod
    def _choose_axis(objects, start, end, boxes, rng, split) -> int:
        if split == SPLIT_RANDOM:
            return rng.randint(0, 2)
        if split == SPLIT_LONGEST:
            box = None
            for i in range(start, end):
                b = boxes[id(objects[i])]
                box = b if box is None else AABB.surrounding_box(box, b)
            extent = box.extent()
            return max(range(3), key=lambda a: extent[a])
        raise ValueError(f"Unknown BVH split strategy: {split!r}")

    @classmethod
    def from_list(cls, hittables, time0: float = 0.0, time1: float = 0.0,
                  rng: Optional[random.Random] = None, split: str = SPLIT_RANDOM) -> "BVHNode":
        # Sorting happens in place, so work on a copy.
        objects = list(hittables.objects if hasattr(hittables, "objects") else hittables)
        node = cls(objects, 0, len(objects), time0, time1, rng, split)
        logger.debug("Built BVH over %d objects (depth %d)", len(objects), node.depth())
        return node

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)

        # Update t_max for right branch if we hit something on the left
        if hit_left is not None:
            t_max = hit_left.t

        if self.right is self.left:
            return hit_left

        hit_right = self.right.hit(ray, t_min, t_max)
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float, time1: float) -> AABB:
        return self.box

    def __repr__(self) -> str:
        return f"BVHNode({self.box!r})"
