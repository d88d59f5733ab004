"""Prometheus metric helpers for bodybox services."""

from .prometheus import *  # noqa: F401,F403

__all__ = [
    'MetricsLabelContext',
    'service_frames_processed_total',
    'service_frames_errors_total',
    'service_frame_processing_seconds',
    'service_full_body_detections_total',
    'service_partial_detections_total',
    'service_invalid_observations_total',
    'service_frames_superseded_total',
    'service_stale_overlays_total',
]
