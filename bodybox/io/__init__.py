from .latest_frame_input import LatestFrameInput

__all__ = ['LatestFrameInput']
