"""Shared Prometheus metric definitions for bodybox services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from prometheus_client import Counter, Histogram

LABEL_NAMES = ("service", "session_id", "worker_id")
DEFAULT_SESSION_ID = "unknown"


# Core processing metrics
service_frames_processed_total = Counter(
    "bodybox_frames_processed_total",
    "Total number of frames annotated by the worker stage.",
    LABEL_NAMES,
)

service_frames_errors_total = Counter(
    "bodybox_frames_errors_total",
    "Total number of frames that failed during annotation.",
    LABEL_NAMES,
)

service_frame_processing_seconds = Histogram(
    "bodybox_frame_processing_seconds",
    "Latency in seconds for annotating a single frame.",
    LABEL_NAMES,
    buckets=(
        0.0005,
        0.001,
        0.005,
        0.01,
        0.02,
        0.05,
        0.1,
        0.25,
        1,
    ),
)


# Detection outcomes
service_full_body_detections_total = Counter(
    "bodybox_full_body_detections_total",
    "Total number of detections that produced an overlay.",
    LABEL_NAMES,
)

service_partial_detections_total = Counter(
    "bodybox_partial_detections_total",
    "Total number of body poses rejected as partial.",
    LABEL_NAMES,
)

service_invalid_observations_total = Counter(
    "bodybox_invalid_observations_total",
    "Total number of observations skipped because their box was degenerate.",
    LABEL_NAMES,
)


# Latest-frame-wins bookkeeping
service_frames_superseded_total = Counter(
    "bodybox_frames_superseded_total",
    "Total number of frames replaced by a newer frame before being read.",
    LABEL_NAMES,
)

service_stale_overlays_total = Counter(
    "bodybox_stale_overlays_total",
    "Total number of overlay sets dropped because a newer frame was already applied.",
    LABEL_NAMES,
)


@dataclass
class MetricsLabelContext:
    """Helper for reusing Prometheus labels with dynamic session ids."""

    service: str
    worker_id: str
    initial_session_id: Optional[str] = None

    def __post_init__(self) -> None:
        self._base_labels = {
            "service": self.service or "unknown",
            "worker_id": str(self.worker_id) if self.worker_id is not None else "unknown",
        }
        initial = self.initial_session_id or DEFAULT_SESSION_ID
        self._label_cache: Dict[str, Dict[str, str]] = {}
        self._current_session_id = DEFAULT_SESSION_ID
        self.labels_for(initial)

    def labels_for(self, session_id: Optional[str]) -> Dict[str, str]:
        """Return labels for the provided session id and cache the result."""

        normalized = str(session_id) if session_id else DEFAULT_SESSION_ID
        if normalized not in self._label_cache:
            labels = {**self._base_labels, "session_id": normalized}
            self._label_cache[normalized] = labels
        self._current_session_id = normalized
        return self._label_cache[normalized]

    def with_metric(self, metric, session_id: Optional[str] = None):
        """Return a labelled child for the provided metric."""

        labels = self.labels_for(session_id or self._current_session_id)
        return metric.labels(**labels)

    @property
    def current_session_id(self) -> str:
        return self._current_session_id
