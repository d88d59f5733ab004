"""
Distance from the camera to a detected person.

The world point under a box comes from an external ray-casting service;
this module only does the arithmetic.
"""
import logging
from typing import Callable, Optional

import numpy as np

from .types import BoundingBox, Point3D

logger = logging.getLogger(__name__)

# (screen_x, screen_y) in viewport pixels -> world point, or None on a miss
Raycaster = Callable[[float, float], Optional[Point3D]]


def euclidean_distance(a: Point3D, b: Point3D) -> float:
    delta = np.array([a.x - b.x, a.y - b.y, a.z - b.z], dtype=np.float64)
    return float(np.sqrt(np.sum(delta ** 2)))


def estimate_distance(box: BoundingBox, camera_position: Point3D,
                      raycast: Raycaster) -> Optional[float]:
    """
    Distance in meters from the camera to the world point under the centre
    of a viewport-space box. Returns None when the ray hits nothing.
    """
    hit = raycast(box.mid_x, box.mid_y)
    if hit is None:
        logger.debug(f"Raycast missed at ({box.mid_x:.1f}, {box.mid_y:.1f})")
        return None
    return euclidean_distance(camera_position, hit)
