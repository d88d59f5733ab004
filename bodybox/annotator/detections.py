"""
Detector results the annotator understands.

The upstream detector can report full body poses, generic human rectangles
or faces. Each variant only differs in how its normalized box is obtained;
the transform into viewport pixels is shared.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .types import BoundingBox, SkeletonObservation

# BGR
YELLOW = (0, 255, 255)
RED = (0, 0, 255)


class DetectionKind(str, Enum):
    BODY_POSE = "body_pose"
    HUMAN_RECT = "human_rect"
    FACE = "face"


@dataclass(frozen=True)
class BodyPoseDetection:
    skeleton: SkeletonObservation
    kind: DetectionKind = DetectionKind.BODY_POSE


@dataclass(frozen=True)
class HumanRectDetection:
    box: BoundingBox
    upper_body_only: bool = False
    kind: DetectionKind = DetectionKind.HUMAN_RECT


@dataclass(frozen=True)
class FaceDetection:
    box: BoundingBox
    kind: DetectionKind = DetectionKind.FACE


Detection = Union[BodyPoseDetection, HumanRectDetection, FaceDetection]


@dataclass(frozen=True)
class Overlay:
    """A rectangle to draw, in viewport pixels, tied to its source detection."""
    index: int
    kind: DetectionKind
    box: BoundingBox
    color: Tuple[int, int, int] = YELLOW


def overlay_color(detection: Detection) -> Tuple[int, int, int]:
    """Full human rectangles are drawn red; upper-body-only ones, faces and body poses yellow."""
    if isinstance(detection, HumanRectDetection) and not detection.upper_body_only:
        return RED
    return YELLOW


def normalized_box(detection: Detection, annotator) -> Optional[BoundingBox]:
    """
    Extract the normalized bounding box for a detection.

    Body poses must qualify as a full body first; partial bodies give None.
    Rectangles and faces carry their own box.
    """
    if isinstance(detection, BodyPoseDetection):
        if not annotator.qualifies(detection.skeleton):
            return None
        return annotator.bounding_box(detection.skeleton)
    if isinstance(detection, (HumanRectDetection, FaceDetection)):
        return detection.box
    raise TypeError(f"Unsupported detection type: {type(detection).__name__}")
