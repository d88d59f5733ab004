"""
Draws overlay rectangles onto image frames.

Overlays come from FrameAnnotator in viewport pixels, so the frame passed
in must have the viewport's size for the rectangles to line up.
"""
from typing import Iterable, Tuple

import cv2 as cv  # type: ignore
import numpy as np

from bodybox.annotator.detections import Overlay


def draw_overlays_on_frame(frame: np.ndarray,
                           overlays: Iterable[Overlay],
                           thickness: int = 5,
                           draw_labels: bool = False) -> np.ndarray:
    """
    Draw unfilled overlay rectangles on the given frame.

    Args:
        frame (np.ndarray): The image frame to draw on (modified in place).
        overlays: Overlays in the frame's pixel coordinates.
        thickness (int): Stroke width in pixels.
        draw_labels (bool): Whether to write the detection index above each box.

    Returns:
        np.ndarray: The annotated image frame.
    """
    if not isinstance(frame, np.ndarray):
        raise ValueError("Frame must be a numpy array")

    for overlay in overlays:
        x1, y1, x2, y2 = [int(round(coord)) for coord in overlay.box.as_xyxy()]
        cv.rectangle(frame, (x1, y1), (x2, y2), overlay.color, thickness)
        if draw_labels:
            label = f"#{overlay.index} {overlay.kind.value}"
            cv.putText(frame, label, (x1, max(y1 - 5, 0)), cv.FONT_HERSHEY_SIMPLEX, 0.5, overlay.color, 1)

    return frame


def frame_size(frame: np.ndarray) -> Tuple[int, int]:
    """(width, height) of a frame."""
    height, width = frame.shape[:2]
    return width, height
