# Import annotator core
from .annotator import *

# Import io interfaces
from .io import *

# Import workers
from .base_worker import BaseWorker
from .overlay_worker import OverlayWorker

# Import overlay layer and drawing
from .visualizer import *

# Import utilities
from .utils import *

__version__ = "1.0.0"

__all__ = [
    # Core classes
    'FrameAnnotator', 'AnnotationResult',
    'BaseWorker', 'OverlayWorker',
    # Data model (imported from .annotator)
    'Joint', 'ESSENTIAL_JOINTS', 'JointObservation', 'SkeletonObservation',
    'Orientation', 'Viewport', 'BoundingBox', 'Point3D', 'InvalidObservation',
    'BodyPoseDetection', 'HumanRectDetection', 'FaceDetection', 'DetectionKind', 'Overlay',
    'image_orientation', 'parse_orientation', 'euclidean_distance', 'estimate_distance',
    # I/O and overlays
    'LatestFrameInput', 'OverlayLayer', 'OverlaySet', 'draw_overlays_on_frame',
    # Utilities (imported from .utils)
    'setup_logging', 'ConfigLoader',
    'decode_frame_payload', 'encode_frame_result',
    'encode_frame_to_base64', 'decode_base64_to_frame',
]
