from .detections import (
    BodyPoseDetection, Detection, DetectionKind, FaceDetection,
    HumanRectDetection, Overlay, normalized_box, overlay_color
)
from .distance import Raycaster, estimate_distance, euclidean_distance
from .frame_annotator import DEFAULT_CONFIDENCE_THRESHOLD, AnnotationResult, FrameAnnotator
from .orientation import ImageOrientation, image_orientation, parse_orientation
from .types import (
    ESSENTIAL_JOINTS, BoundingBox, InvalidObservation, Joint, JointObservation,
    Orientation, Point3D, SkeletonObservation, Viewport
)

__all__ = [
    'FrameAnnotator', 'AnnotationResult', 'DEFAULT_CONFIDENCE_THRESHOLD',
    'Joint', 'ESSENTIAL_JOINTS', 'JointObservation', 'SkeletonObservation',
    'Orientation', 'Viewport', 'BoundingBox', 'Point3D', 'InvalidObservation',
    'BodyPoseDetection', 'HumanRectDetection', 'FaceDetection', 'Detection',
    'DetectionKind', 'Overlay', 'normalized_box', 'overlay_color',
    'ImageOrientation', 'image_orientation', 'parse_orientation',
    'Raycaster', 'euclidean_distance', 'estimate_distance',
]
