"""
The current set of overlays shown on screen.

Every frame replaces the whole set: previous overlays are cleared before the
new ones are shown, and nothing accumulates across frames. When results
arrive out of order the newest frame wins and older results are dropped.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from bodybox.annotator.detections import Overlay
from bodybox.metrics.prometheus import MetricsLabelContext, service_stale_overlays_total

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlaySet:
    frame_id: Optional[int] = None
    overlays: Tuple[Overlay, ...] = ()

    def __len__(self) -> int:
        return len(self.overlays)


EMPTY_OVERLAY_SET = OverlaySet()


class OverlayLayer:
    """Holds the overlay set for one rendering surface."""

    def __init__(self, service_name: str = "unknown", session_id: Optional[str] = None):
        self._current = EMPTY_OVERLAY_SET
        self._lock = threading.Lock()
        self.is_running = False
        self._metrics_context = MetricsLabelContext(
            service=service_name,
            worker_id="overlay",
            initial_session_id=session_id,
        )

    @property
    def current(self) -> OverlaySet:
        return self._current

    def replace(self, frame_id: Optional[int], overlays: Iterable[Overlay]) -> bool:
        """
        Swap in the overlays for a frame.

        Returns False (and keeps the current set) when a newer frame has
        already been applied.
        """
        new_set = OverlaySet(frame_id=frame_id, overlays=tuple(overlays))
        with self._lock:
            current_id = self._current.frame_id
            if frame_id is not None and current_id is not None and frame_id < current_id:
                logger.debug(f"Dropping overlays for frame {frame_id}, frame {current_id} already shown")
                self._metrics_context.with_metric(service_stale_overlays_total).inc()
                return False
            self._current = new_set

        return True

    def clear(self) -> None:
        with self._lock:
            self._current = EMPTY_OVERLAY_SET

    # Output interface used by BaseWorker
    async def initialize(self) -> bool:
        self.is_running = True
        return True

    async def write_data(self, results: Dict[str, Any]) -> bool:
        return self.replace(results.get('frame_id'), results.get('overlays', []))

    async def cleanup(self) -> None:
        self.is_running = False
        self.clear()
