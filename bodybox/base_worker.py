import asyncio
import functools
import logging
import time
from abc import abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

from bodybox.metrics.prometheus import (
    MetricsLabelContext,
    service_frame_processing_seconds,
    service_frames_errors_total,
    service_frames_processed_total,
)


class BaseWorker:
    def __init__(
        self,
        worker_id: int,
        model_config: Dict,
        input_interface,
        output_interface,
    ):
        self.worker_id = worker_id
        self.input_interface = input_interface
        self.output_interface = output_interface
        self.model_config = model_config
        self._model_init()
        self._executor = ThreadPoolExecutor(max_workers=1)

        service_name = "unknown"
        session_id = None
        if isinstance(model_config, dict):
            service_name = model_config.get("service_name", service_name)
            session_id = model_config.get("session_id")

        self._metrics_context = MetricsLabelContext(
            service=service_name,
            worker_id=str(worker_id),
            initial_session_id=session_id,
        )

    @abstractmethod
    def _model_init(self):
        pass

    @abstractmethod
    def _predict(self, inputs: Any) -> Any:
        pass

    def _format_results(self, results: Any) -> dict:
        """Format the results for output."""
        return results

    @staticmethod
    def _frame_id(inputs: Any) -> Any:
        return inputs.get("frame_id") if isinstance(inputs, dict) else None

    def _input_finished(self) -> bool:
        interface = self.input_interface
        if getattr(interface, "is_running", True):
            return False
        has_pending = getattr(interface, "has_pending", None)
        return not (has_pending and has_pending())

    async def run(self):
        """Run the worker, reading from input and writing to output until the input stops."""
        loop = asyncio.get_running_loop()

        while True:
            try:
                inputs = await self.input_interface.read_data()

                if inputs is None:
                    if self._input_finished():
                        logging.info(f"Worker {self.worker_id} input finished, stopping")
                        break
                    continue

                session_id = inputs.get("session_id") if isinstance(inputs, dict) else None
                labels = self._metrics_context.labels_for(session_id)

                start_time = time.perf_counter()
                try:
                    results = await loop.run_in_executor(
                        self._executor,
                        functools.partial(self._predict, inputs),
                    )
                except Exception as e:
                    duration = time.perf_counter() - start_time
                    service_frame_processing_seconds.labels(**labels).observe(duration)
                    service_frames_errors_total.labels(**labels).inc()
                    logging.error(f"Worker {self.worker_id} failed on frame {self._frame_id(inputs)}: {e}")
                    continue

                duration = time.perf_counter() - start_time
                service_frame_processing_seconds.labels(**labels).observe(duration)

                if results is None:
                    service_frames_errors_total.labels(**labels).inc()
                    continue

                service_frames_processed_total.labels(**labels).inc()
                output = self._format_results(results)
                if isinstance(output, dict) and isinstance(inputs, dict):
                    output.setdefault("session_id", inputs.get("session_id"))

                await self.output_interface.write_data(output)
            except asyncio.CancelledError:
                logging.info(f"Worker {self.worker_id} cancelled")
                raise
            except Exception as e:
                logging.error(f"Worker {self.worker_id} error: {e}")
                raise

    def cleanup(self):
        self._executor.shutdown(wait=False)

    def get_metrics_labels(self, session_id: Any = None) -> Dict[str, str]:
        """Expose metric labels for the current worker."""

        return self._metrics_context.labels_for(session_id)
