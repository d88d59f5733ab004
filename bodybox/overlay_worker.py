"""
overlay worker.py
"""
import logging
from typing import Dict, List, Optional

from bodybox.annotator import (
    FrameAnnotator, Overlay, Point3D, Raycaster, estimate_distance, image_orientation
)
from bodybox.base_worker import BaseWorker
from bodybox.metrics.prometheus import (
    service_full_body_detections_total,
    service_invalid_observations_total,
    service_partial_detections_total,
)
from bodybox.utils.serializers import decode_frame_payload
from bodybox.visualizer.box_drawer import draw_overlays_on_frame


class OverlayWorker(BaseWorker):
    """Turns per-frame detector output into the overlay set for that frame."""

    def __init__(self, worker_id: int,
                 model_config: Dict,
                 input_interface,
                 output_interface,
                 raycaster: Optional[Raycaster] = None):
        self.raycaster = raycaster
        BaseWorker.__init__(self, worker_id, model_config,
                            input_interface, output_interface)

        # Processing state
        self.frame_count = 0

        logging.info(f"OverlayWorker {worker_id} initialized")

    def _model_init(self):
        """Set up the annotator from the worker config."""
        self.frame_annotator = FrameAnnotator(
            confidence_threshold=self.model_config.get('confidence_threshold', 0.3),
        )
        self.line_thickness = self.model_config.get('line_thickness', 5)
        self.draw_labels = self.model_config.get('draw_labels', False)
        logging.info(f"OverlayWorker {self.worker_id} annotator ready "
                     f"(threshold {self.frame_annotator.confidence_threshold})")

    def _predict(self, inputs: Dict) -> Optional[Dict]:
        return self.annotate_frame(inputs)

    def annotate_frame(self, inputs: Dict) -> Optional[Dict]:
        """
        Annotate one frame.

        Args:
            inputs (Dict): Frame payload with 'detections', 'orientation', 'viewport'
                and optionally 'camera_position' and 'image_bytes'.

        Returns:
            Dict: Result data for the overlay layer, or None if the payload was unusable.
        """
        try:
            payload = decode_frame_payload(inputs)
        except ValueError as e:
            logging.error(f"Worker {self.worker_id}: dropping malformed frame {inputs.get('frame_id')}: {e}")
            return None

        result = self.frame_annotator.annotate_detections(
            payload.detections, payload.orientation, payload.viewport)

        labels = self.get_metrics_labels(payload.session_id)
        service_full_body_detections_total.labels(**labels).inc(len(result.overlays))
        service_partial_detections_total.labels(**labels).inc(result.partial_count)
        service_invalid_observations_total.labels(**labels).inc(result.invalid_count)

        result_data = {
            'frame_id': payload.frame_id,
            'session_id': payload.session_id,
            'overlays': result.overlays,
            'partial_count': result.partial_count,
            'invalid_count': result.invalid_count,
            'image_orientation': image_orientation(payload.orientation).value,
            'distances': self._estimate_distances(result.overlays, payload.camera_position),
        }

        if payload.image is not None:
            result_data['annotated_frame'] = draw_overlays_on_frame(
                payload.image.copy(), result.overlays,
                thickness=self.line_thickness, draw_labels=self.draw_labels)

        self.frame_count += 1
        return result_data

    def _estimate_distances(self, overlays: List[Overlay],
                            camera_position: Optional[Point3D]) -> List[Dict]:
        if self.raycaster is None or camera_position is None:
            return []

        distances = []
        for overlay in overlays:
            meters = estimate_distance(overlay.box, camera_position, self.raycaster)
            if meters is None:
                continue
            logging.info(f"Distance to person: {meters:.2f} meters of detection {overlay.index}")
            distances.append({'index': overlay.index, 'meters': meters})
        return distances

    def cleanup(self):
        """Clean up resources when worker is shut down."""
        logging.info(f"OverlayWorker {self.worker_id} cleanup completed after {self.frame_count} frames")
        super().cleanup()
