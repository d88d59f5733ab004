"""
Shared fixtures: a standing person seen in portrait, in normalized
detector coordinates (y up).
"""
import logging

import pytest

from bodybox.annotator import Joint, SkeletonObservation

logging.basicConfig(level=logging.INFO)

STANDING_PERSON = {
    Joint.NOSE: (0.50, 0.90),
    Joint.NECK: (0.50, 0.80),
    Joint.LEFT_SHOULDER: (0.40, 0.78),
    Joint.RIGHT_SHOULDER: (0.60, 0.78),
    Joint.LEFT_HIP: (0.45, 0.50),
    Joint.RIGHT_HIP: (0.55, 0.50),
    Joint.LEFT_ANKLE: (0.44, 0.10),
    Joint.RIGHT_ANKLE: (0.56, 0.10),
}


def build_skeleton(confidence=0.9, omit=(), overrides=None):
    joints = {
        joint: (x, y, confidence)
        for joint, (x, y) in STANDING_PERSON.items()
        if joint not in omit
    }
    joints.update(overrides or {})
    return SkeletonObservation.from_dict(joints)


def skeleton_payload(confidence=0.9, omit=()):
    """The same person as a wire-format body_pose detection."""
    joints = {
        joint.value: {'x': x, 'y': y, 'confidence': confidence}
        for joint, (x, y) in STANDING_PERSON.items()
        if joint not in omit
    }
    return {'kind': 'body_pose', 'joints': joints}


@pytest.fixture
def make_skeleton():
    return build_skeleton


@pytest.fixture
def make_detection_payload():
    return skeleton_payload


@pytest.fixture
def frame_payload():
    def _frame(frame_id=1, detections=None, orientation='portrait', width=390, height=844, **extra):
        payload = {
            'frame_id': frame_id,
            'session_id': 'test-session',
            'orientation': orientation,
            'viewport': {'width': width, 'height': height},
            'detections': [skeleton_payload()] if detections is None else detections,
        }
        payload.update(extra)
        return payload

    return _frame
