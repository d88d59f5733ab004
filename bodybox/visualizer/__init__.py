from .box_drawer import draw_overlays_on_frame, frame_size
from .overlay_layer import EMPTY_OVERLAY_SET, OverlayLayer, OverlaySet

__all__ = ['draw_overlays_on_frame', 'frame_size', 'OverlayLayer', 'OverlaySet', 'EMPTY_OVERLAY_SET']
