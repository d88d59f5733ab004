"""
Data types shared by the annotator, the overlay layer and the service.

Coordinates on JointObservation and on a BoundingBox produced by
FrameAnnotator.bounding_box are normalized ([0, 1], detector axes, y up).
A BoundingBox returned by FrameAnnotator.transform is in viewport pixels.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple


class Joint(str, Enum):
    """Skeletal landmarks used to decide a full-body detection."""
    NOSE = "nose"
    NECK = "neck"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"


ESSENTIAL_JOINTS: Tuple[Joint, ...] = (
    Joint.NOSE,
    Joint.NECK,
    Joint.LEFT_SHOULDER,
    Joint.RIGHT_SHOULDER,
    Joint.LEFT_HIP,
    Joint.RIGHT_HIP,
    Joint.LEFT_ANKLE,
    Joint.RIGHT_ANKLE,
)


class Orientation(str, Enum):
    """Physical device orientation at the time a frame is processed."""
    PORTRAIT = "portrait"
    PORTRAIT_UPSIDE_DOWN = "portrait_upside_down"
    LANDSCAPE_LEFT = "landscape_left"
    LANDSCAPE_RIGHT = "landscape_right"
    UNKNOWN = "unknown"
    FACE_UP = "face_up"
    FACE_DOWN = "face_down"

    @property
    def is_landscape(self) -> bool:
        return self in (Orientation.LANDSCAPE_LEFT, Orientation.LANDSCAPE_RIGHT)


class InvalidObservation(ValueError):
    """Raised when an observation cannot produce a finite bounding box."""


@dataclass(frozen=True)
class JointObservation:
    """A single joint: normalized position plus detector confidence."""
    x: float
    y: float
    confidence: float


@dataclass(frozen=True)
class SkeletonObservation:
    """All joints reported for one person in one frame."""
    joints: Mapping[Joint, JointObservation] = field(default_factory=dict)

    def get(self, joint: Joint) -> Optional[JointObservation]:
        return self.joints.get(joint)

    def confidence(self, joint: Joint) -> float:
        point = self.joints.get(joint)
        return point.confidence if point is not None else 0.0

    @classmethod
    def from_dict(cls, joints: Dict[Joint, Tuple[float, float, float]]) -> "SkeletonObservation":
        return cls({joint: JointObservation(*values) for joint, values in joints.items()})


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    def __post_init__(self):
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            raise ValueError(f"Viewport must have a finite size, got {self.width}x{self.height}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must have a positive size, got {self.width}x{self.height}")


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle given by its origin and size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        return self.min_x, self.min_y, self.max_x, self.max_y


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float
