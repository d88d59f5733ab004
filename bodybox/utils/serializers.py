"""
Serialization utilities for bodybox.

Frame payloads arrive as JSON-like dicts:

    {
        "frame_id": 12,
        "session_id": "ar-session-1",
        "orientation": "portrait",
        "viewport": {"width": 390, "height": 844},
        "detections": [
            {"kind": "body_pose",
             "joints": {"nose": {"x": 0.51, "y": 0.82, "confidence": 0.9}, ...}},
            {"kind": "human_rect", "box": {"x": 0.2, "y": 0.1, "width": 0.3, "height": 0.7},
             "upper_body_only": false},
            {"kind": "face", "box": {...}}
        ],
        "camera_position": [0.0, 0.0, 0.0],     # optional
        "image_bytes": "/9j/4AAQSkZJRgABAQAAAQ..." # optional, base64 JPEG
    }
"""
import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import cv2
import numpy as np

from bodybox.annotator.detections import (
    BodyPoseDetection, Detection, DetectionKind, FaceDetection, HumanRectDetection, Overlay
)
from bodybox.annotator.orientation import parse_orientation, snake_case
from bodybox.annotator.types import (
    BoundingBox, Joint, JointObservation, Orientation, Point3D, SkeletonObservation, Viewport
)

logger = logging.getLogger(__name__)


@dataclass
class FramePayload:
    """One decoded frame: what the detector saw plus the session state at that moment."""
    frame_id: Optional[int]
    orientation: Orientation
    viewport: Viewport
    detections: List[Detection] = field(default_factory=list)
    session_id: Optional[str] = None
    camera_position: Optional[Point3D] = None
    image: Optional[np.ndarray] = None


def encode_frame_to_jpeg(frame: np.ndarray, quality: int = 85) -> bytes:
    """
    Encode a BGR numpy array frame to JPEG bytes.

    Args:
        frame: BGR numpy array
        quality: JPEG compression quality (0-100)

    Returns:
        JPEG encoded bytes
    """
    encode_params = [cv2.IMWRITE_JPEG_QUALITY, quality]
    success, buffer = cv2.imencode('.jpg', frame, encode_params)

    if not success:
        raise ValueError("Failed to encode frame to JPEG")

    return buffer.tobytes()


def decode_jpeg_to_frame(jpeg_bytes: bytes) -> np.ndarray:
    """Decode JPEG bytes to a BGR numpy array."""
    if not jpeg_bytes:
        raise ValueError("Empty image buffer")

    nparr = np.frombuffer(jpeg_bytes, np.uint8)
    try:
        frame = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ValueError(f"Failed to decode JPEG bytes: {e}") from e

    if frame is None:
        raise ValueError("Failed to decode JPEG bytes")

    return frame


def encode_frame_to_base64(frame: np.ndarray, quality: int = 85) -> str:
    jpeg_bytes = encode_frame_to_jpeg(frame, quality)
    return base64.b64encode(jpeg_bytes).decode('utf-8')


def decode_base64_to_frame(base64_str: str) -> np.ndarray:
    jpeg_bytes = base64.b64decode(base64_str)
    return decode_jpeg_to_frame(jpeg_bytes)


def _parse_joint(name: str) -> Optional[Joint]:
    try:
        return Joint(snake_case(name))
    except ValueError:
        return None


def _number(data: Mapping[str, Any], key: str) -> float:
    try:
        return float(data[key])
    except KeyError:
        raise ValueError(f"Missing field '{key}'")
    except (TypeError, ValueError):
        raise ValueError(f"Field '{key}' must be a number, got {data[key]!r}")


def decode_box(data: Mapping[str, Any]) -> BoundingBox:
    if not isinstance(data, Mapping):
        raise ValueError(f"Bounding box must be an object, got {type(data).__name__}")
    return BoundingBox(
        x=_number(data, 'x'),
        y=_number(data, 'y'),
        width=_number(data, 'width'),
        height=_number(data, 'height'),
    )


def decode_skeleton(data: Mapping[str, Any]) -> SkeletonObservation:
    """
    Decode {"joints": {name: {"x", "y", "confidence"}}}.

    Joint names may be snake_case or camelCase. Joints outside the essential
    set are ignored since nothing downstream reads them.
    """
    joints_data = data.get('joints', {})
    if not isinstance(joints_data, Mapping):
        raise ValueError("'joints' must be an object keyed by joint name")

    joints: Dict[Joint, JointObservation] = {}
    for name, point in joints_data.items():
        joint = _parse_joint(name)
        if joint is None:
            continue
        if not isinstance(point, Mapping):
            raise ValueError(f"Joint '{name}' must be an object")
        joints[joint] = JointObservation(
            x=_number(point, 'x'),
            y=_number(point, 'y'),
            confidence=_number(point, 'confidence'),
        )
    return SkeletonObservation(joints)


def decode_detection(data: Mapping[str, Any]) -> Detection:
    """Dispatch on 'kind'; a missing kind means a body pose."""
    kind = data.get('kind', DetectionKind.BODY_POSE.value)
    try:
        kind = DetectionKind(kind)
    except ValueError:
        raise ValueError(f"Unknown detection kind: {kind!r}")

    if kind == DetectionKind.BODY_POSE:
        return BodyPoseDetection(decode_skeleton(data))
    if kind == DetectionKind.HUMAN_RECT:
        return HumanRectDetection(decode_box(data.get('box')),
                                  upper_body_only=bool(data.get('upper_body_only', False)))
    return FaceDetection(decode_box(data.get('box')))


def decode_point(data: Any) -> Point3D:
    if isinstance(data, Mapping):
        return Point3D(_number(data, 'x'), _number(data, 'y'), _number(data, 'z'))
    if isinstance(data, (list, tuple)) and len(data) == 3:
        return Point3D(*(float(v) for v in data))
    raise ValueError(f"Expected a 3D point, got {data!r}")


def decode_frame_payload(data: Mapping[str, Any]) -> FramePayload:
    """Decode a frame payload dict; raises ValueError on malformed input."""
    viewport_data = data.get('viewport')
    if not isinstance(viewport_data, Mapping):
        raise ValueError("Frame payload requires a 'viewport' with width and height")
    viewport = Viewport(width=_number(viewport_data, 'width'), height=_number(viewport_data, 'height'))

    detections_data = data.get('detections') or []
    if not isinstance(detections_data, list):
        raise ValueError("'detections' must be a list")

    camera_position = data.get('camera_position')
    image_bytes = data.get('image_bytes')
    frame_id = data.get('frame_id')

    return FramePayload(
        frame_id=int(frame_id) if frame_id is not None else None,
        orientation=parse_orientation(data.get('orientation')),
        viewport=viewport,
        detections=[decode_detection(item) for item in detections_data],
        session_id=data.get('session_id'),
        camera_position=decode_point(camera_position) if camera_position is not None else None,
        image=decode_base64_to_frame(image_bytes) if image_bytes else None,
    )


def encode_box(box: BoundingBox) -> Dict[str, float]:
    return {'x': box.x, 'y': box.y, 'width': box.width, 'height': box.height}


def encode_overlay(overlay: Overlay) -> Dict[str, Any]:
    return {
        'index': overlay.index,
        'kind': overlay.kind.value,
        'box': encode_box(overlay.box),
        'color': list(overlay.color),
    }


def encode_frame_result(result: Mapping[str, Any]) -> Dict[str, Any]:
    """JSON-safe view of an OverlayWorker result (the annotated image is left out)."""
    return {
        'frame_id': result.get('frame_id'),
        'session_id': result.get('session_id'),
        'overlays': [encode_overlay(o) for o in result.get('overlays', [])],
        'distances': result.get('distances', []),
        'image_orientation': result.get('image_orientation'),
        'partial_count': result.get('partial_count', 0),
        'invalid_count': result.get('invalid_count', 0),
    }
