from .serializers import (
    FramePayload,
    encode_frame_to_jpeg, decode_jpeg_to_frame,
    encode_frame_to_base64, decode_base64_to_frame,
    decode_box, decode_skeleton, decode_detection, decode_point, decode_frame_payload,
    encode_box, encode_overlay, encode_frame_result
)
from .setup_logging import setup_logging
from .yaml_config_loader import ConfigLoader

__all__ = [
    'setup_logging',
    'ConfigLoader',
    # Serialization utilities
    'FramePayload',
    'encode_frame_to_jpeg', 'decode_jpeg_to_frame',
    'encode_frame_to_base64', 'decode_base64_to_frame',
    'decode_box', 'decode_skeleton', 'decode_detection', 'decode_point', 'decode_frame_payload',
    'encode_box', 'encode_overlay', 'encode_frame_result',
]
