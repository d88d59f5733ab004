"""
FrameAnnotator turns per-frame skeleton observations into on-screen boxes.

Steps per observation: decide whether the full body is visible, enclose the
essential joints in a normalized box, then map that box into viewport
pixels for the current device orientation.
"""
import logging
import math
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .detections import BodyPoseDetection, Detection, Overlay, normalized_box, overlay_color
from .types import (
    ESSENTIAL_JOINTS,
    BoundingBox,
    InvalidObservation,
    Orientation,
    SkeletonObservation,
    Viewport,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.3


@dataclass
class AnnotationResult:
    """Overlays for one frame plus what was skipped on the way."""
    overlays: List[Overlay] = field(default_factory=list)
    partial_count: int = 0
    invalid_count: int = 0


class FrameAnnotator:
    """Stateless: safe to share between threads and to call once per frame."""

    def __init__(self, confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD):
        self.confidence_threshold = confidence_threshold

    def qualifies(self, observation: SkeletonObservation) -> bool:
        """True iff every essential joint is present above the threshold (strict)."""
        return all(
            observation.confidence(joint) > self.confidence_threshold
            for joint in ESSENTIAL_JOINTS
        )

    def bounding_box(self, observation: SkeletonObservation) -> Optional[BoundingBox]:
        """Normalized box around essential joints with positive confidence, or None."""
        min_x = min_y = sys.float_info.max
        max_x = max_y = 0.0
        found = False

        for joint in ESSENTIAL_JOINTS:
            point = observation.get(joint)
            if point is None or not point.confidence > 0:
                continue
            found = True
            min_x = min(min_x, point.x)
            min_y = min(min_y, point.y)
            max_x = max(max_x, point.x)
            max_y = max(max_y, point.y)

        if not found:
            return None
        return BoundingBox(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    def transform(self, box: BoundingBox, orientation: Orientation, viewport: Viewport) -> BoundingBox:
        """Map a normalized box into viewport pixels for the given orientation."""
        if orientation.is_landscape:
            width = box.width * viewport.height
            height = box.height * viewport.width
        else:
            width = box.width * viewport.width
            height = box.height * viewport.height

        if orientation == Orientation.LANDSCAPE_LEFT:
            x = box.min_y * viewport.width
            y = box.min_x * viewport.height
        elif orientation == Orientation.LANDSCAPE_RIGHT:
            x = (1 - box.max_y) * viewport.width
            y = (1 - box.max_x) * viewport.height
        elif orientation == Orientation.PORTRAIT_UPSIDE_DOWN:
            x = (1 - box.max_x) * viewport.width
            y = box.min_y * viewport.height
        else:
            # portrait, unknown, face up and face down
            x = box.min_x * viewport.width
            y = (1 - box.max_y) * viewport.height

        return BoundingBox(x=x, y=y, width=width, height=height)

    def annotate(self, observations: Sequence[SkeletonObservation],
                 orientation: Orientation, viewport: Viewport) -> List[BoundingBox]:
        """Viewport boxes for every full-body observation, in input order."""
        detections = [BodyPoseDetection(observation) for observation in observations]
        result = self.annotate_detections(detections, orientation, viewport)
        return [overlay.box for overlay in result.overlays]

    def annotate_detections(self, detections: Sequence[Detection],
                            orientation: Orientation, viewport: Viewport) -> AnnotationResult:
        """Like annotate, but over any detection kind and keeping source indices."""
        result = AnnotationResult()

        for index, detection in enumerate(detections):
            try:
                box = self._normalized_box(detection)
                if box is not None:
                    viewport_box = _require_finite(self.transform(box, orientation, viewport))
            except InvalidObservation as e:
                logger.warning(f"Skipping detection {index}: {e}")
                result.invalid_count += 1
                continue

            if box is None:
                logger.info(f"Partial body detected (detection {index})")
                result.partial_count += 1
                continue

            if isinstance(detection, BodyPoseDetection):
                logger.info(f"Full body detected (detection {index}): {box}")

            result.overlays.append(Overlay(
                index=index,
                kind=detection.kind,
                box=viewport_box,
                color=overlay_color(detection),
            ))

        return result

    def _normalized_box(self, detection: Detection) -> Optional[BoundingBox]:
        box = normalized_box(detection, self)
        if box is None:
            if isinstance(detection, BodyPoseDetection) and self.qualifies(detection.skeleton):
                raise InvalidObservation("no essential joint has positive confidence")
            return None
        return _require_finite(box)


def _require_finite(box: BoundingBox) -> BoundingBox:
    if not all(math.isfinite(v) for v in (box.x, box.y, box.width, box.height)):
        raise InvalidObservation(f"non-finite bounding box {box}")
    return box
