import asyncio
import logging
from typing import Any, Dict, Optional

from bodybox.metrics.prometheus import MetricsLabelContext, service_frames_superseded_total

logger = logging.getLogger(__name__)


class LatestFrameInput:
    """
    Single-slot frame mailbox between the detector callback and the worker.

    Only the newest unread frame is kept: a frame put while another is still
    waiting replaces it, so the worker never annotates stale frames.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        metrics_service: Optional[str] = None,
        metrics_session_id: Optional[str] = None,
    ):
        config = config or {}
        self.read_timeout = config.get('read_timeout', 0.1)
        self.is_running = False
        self._latest: Optional[Dict[str, Any]] = None
        self._available = asyncio.Event()
        self.frames_superseded = 0
        self._metrics_context = MetricsLabelContext(
            service=metrics_service or 'unknown',
            worker_id='input',
            initial_session_id=metrics_session_id or config.get('session_id'),
        )

    async def initialize(self) -> bool:
        self.is_running = True
        logger.info("Latest-frame input ready")
        return True

    def put(self, payload: Dict[str, Any]) -> None:
        """Hand over a frame; replaces any frame not yet read."""
        if not self.is_running:
            raise RuntimeError("LatestFrameInput not initialized")

        if self._latest is not None:
            self.frames_superseded += 1
            self._metrics_context.with_metric(service_frames_superseded_total).inc()
            logger.debug(f"Frame {self._latest.get('frame_id')} superseded by {payload.get('frame_id')}")
        self._latest = payload
        self._available.set()

    async def read_data(self) -> Optional[Dict[str, Any]]:
        """Next frame, or None if nothing arrived within read_timeout."""
        if self._latest is None and self.is_running:
            try:
                await asyncio.wait_for(self._available.wait(), timeout=self.read_timeout)
            except asyncio.TimeoutError:
                return None

        payload, self._latest = self._latest, None
        self._available.clear()
        return payload

    def has_pending(self) -> bool:
        return self._latest is not None

    async def cleanup(self) -> None:
        """Stop accepting frames; a frame already waiting is still delivered."""
        self.is_running = False
        self._available.set()
        logger.info(f"Latest-frame input stopped ({self.frames_superseded} frames superseded)")
