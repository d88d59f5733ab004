from .app import create_overlay_app, main
from .models import AnnotateResponse, FrameRequest, HealthSummary, OverlaySetResponse
from .service_config import DEFAULT_CONFIG_PATH, ServiceConfig, load_service_config

__all__ = [
    'create_overlay_app', 'main',
    'ServiceConfig', 'load_service_config', 'DEFAULT_CONFIG_PATH',
    'FrameRequest', 'AnnotateResponse', 'OverlaySetResponse', 'HealthSummary',
]
