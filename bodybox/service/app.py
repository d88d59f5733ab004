import argparse
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Info as PrometheusInfo
from prometheus_fastapi_instrumentator import Instrumentator
from prometheus_fastapi_instrumentator import metrics as instrumentator_metrics

from bodybox.annotator import Raycaster, euclidean_distance
from bodybox.io import LatestFrameInput
from bodybox.overlay_worker import OverlayWorker
from bodybox.utils.serializers import decode_point, encode_overlay
from bodybox.utils.setup_logging import setup_logging
from bodybox.visualizer import OverlayLayer, OverlaySet

from .models import (
    AnnotateResponse,
    DistanceRequest,
    DistanceResponse,
    FrameAccepted,
    FrameRequest,
    HealthSummary,
    OverlaySetResponse,
)
from .service_config import DEFAULT_CONFIG_PATH, ServiceConfig, load_service_config

logger = logging.getLogger(__name__)

# Registered once per process; every app created here shares them.
instrumentator = Instrumentator()
instrumentator.add(instrumentator_metrics.default())

service_info_metric = PrometheusInfo(
    "bodybox_service_info",
    "Static metadata about the overlay service.",
)


def _overlay_set_response(overlay_set: OverlaySet) -> OverlaySetResponse:
    return OverlaySetResponse(
        frame_id=overlay_set.frame_id,
        overlays=[encode_overlay(o) for o in overlay_set.overlays],
    )


def _annotate_response(result: Dict[str, Any], applied: bool) -> AnnotateResponse:
    return AnnotateResponse(
        frame_id=result['frame_id'],
        applied=applied,
        overlays=[encode_overlay(o) for o in result['overlays']],
        partial_count=result['partial_count'],
        invalid_count=result['invalid_count'],
        image_orientation=result['image_orientation'],
        distances=result['distances'],
    )


def create_overlay_app(config: Optional[ServiceConfig] = None,
                       raycaster: Optional[Raycaster] = None) -> FastAPI:
    """Create the overlay service app with its worker, frame input and overlay layer."""
    config = config or ServiceConfig()
    start_time = time.time()

    frame_input = LatestFrameInput(
        {'read_timeout': config.read_timeout, 'session_id': config.session_id},
        metrics_service=config.service_name,
    )
    overlay_layer = OverlayLayer(service_name=config.service_name, session_id=config.session_id)
    worker = OverlayWorker(
        worker_id=0,
        model_config=config.worker_config(),
        input_interface=frame_input,
        output_interface=overlay_layer,
        raycaster=raycaster,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{config.service_name} Starting (lifespan startup)...")
        service_info_metric.info({"service_name": config.service_name,
                                  "version": config.service_version})

        await frame_input.initialize()
        await overlay_layer.initialize()
        app.state.worker_task = asyncio.create_task(worker.run())

        try:
            yield  # App is running here
        finally:
            logger.info(f"{config.service_name} Shutting Down (lifespan shutdown)...")
            await frame_input.cleanup()
            try:
                await asyncio.wait_for(app.state.worker_task, timeout=5)
            except asyncio.TimeoutError:
                logger.warning("Overlay worker did not stop in time, cancelling")
                app.state.worker_task.cancel()
            except Exception as e:
                logger.error(f"Overlay worker stopped with error: {e}")
            worker.cleanup()
            await overlay_layer.cleanup()

    app = FastAPI(
        title=config.service_name,
        description=config.service_description,
        version=config.service_version,
        lifespan=lifespan
    )
    app.state.config = config
    app.state.worker = worker
    app.state.frame_input = frame_input
    app.state.overlay_layer = overlay_layer
    app.state.worker_task = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    instrumentator.instrument(app).expose(app, include_in_schema=False)

    @app.post("/annotate", response_model=AnnotateResponse)
    async def annotate(request: FrameRequest):
        """Annotate a frame now and make its overlays the current set."""
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, worker.annotate_frame, request.model_dump())
        if result is None:
            raise HTTPException(status_code=422, detail="Frame payload could not be decoded")
        applied = overlay_layer.replace(result['frame_id'], result['overlays'])
        return _annotate_response(result, applied)

    @app.post("/frames", response_model=FrameAccepted, status_code=202)
    async def submit_frame(request: FrameRequest):
        """Queue a frame for the background worker; an unread older frame is replaced."""
        try:
            frame_input.put(request.model_dump())
        except RuntimeError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return FrameAccepted(frame_id=request.frame_id, accepted=True,
                             frames_superseded=frame_input.frames_superseded)

    @app.get("/overlays", response_model=OverlaySetResponse)
    async def get_overlays():
        return _overlay_set_response(overlay_layer.current)

    @app.delete("/overlays", response_model=OverlaySetResponse)
    async def clear_overlays():
        overlay_layer.clear()
        return _overlay_set_response(overlay_layer.current)

    @app.post("/distance", response_model=DistanceResponse)
    async def distance(request: DistanceRequest):
        camera = decode_point(request.camera.model_dump())
        target = decode_point(request.target.model_dump())
        return DistanceResponse(meters=euclidean_distance(camera, target))

    @app.get("/health", response_model=HealthSummary)
    async def health_check():
        task = app.state.worker_task
        worker_running = task is not None and not task.done()
        current = overlay_layer.current
        return HealthSummary(
            healthy=worker_running,
            service=config.service_name,
            version=config.service_version,
            worker_running=worker_running,
            frames_annotated=worker.frame_count,
            current_frame_id=current.frame_id,
            overlays_shown=len(current),
            uptime_seconds=time.time() - start_time,
            last_check=datetime.now().isoformat(),
        )

    return app


def main(argv=None):
    """Run the overlay service with command line argument parsing."""
    parser = argparse.ArgumentParser(description="Full-body overlay service")
    parser.add_argument("--config", default=None,
                        help=f"YAML config file (e.g. {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    parser.add_argument("--log-level", default=None, help="Logging level")
    args = parser.parse_args(argv)

    config = load_service_config(args.config)
    if args.host:
        config.default_host = args.host
    if args.port:
        config.default_port = args.port
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(config.log_level)
    app = create_overlay_app(config)

    uvicorn.run(
        app,
        host=config.default_host,
        port=config.default_port,
    )
