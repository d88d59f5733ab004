import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from bodybox.utils.yaml_config_loader import ConfigLoader

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "dev_overlay_config.yaml"

# YAML section -> {yaml key: ServiceConfig field}
_SECTIONS = {
    'service': {
        'name': 'service_name',
        'description': 'service_description',
        'version': 'service_version',
        'host': 'default_host',
        'port': 'default_port',
        'log_level': 'log_level',
        'session_id': 'session_id',
    },
    'annotator': {
        'confidence_threshold': 'confidence_threshold',
    },
    'overlay': {
        'line_thickness': 'line_thickness',
        'draw_labels': 'draw_labels',
    },
    'worker': {
        'read_timeout': 'read_timeout',
    },
}

_ENV_OVERRIDES = {
    'BODYBOX_HOST': 'default_host',
    'BODYBOX_PORT': 'default_port',
    'BODYBOX_LOG_LEVEL': 'log_level',
}


@dataclass
class ServiceConfig:
    """Configuration for the overlay service."""

    service_name: str = "Overlay Service"
    service_description: str = "Full-body detection overlays in viewport coordinates"
    service_version: str = "1.0.0"
    default_host: str = "0.0.0.0"
    default_port: int = 8010
    log_level: str = "INFO"
    session_id: Optional[str] = None

    confidence_threshold: float = 0.3
    line_thickness: int = 5
    draw_labels: bool = False
    read_timeout: float = 0.1

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "ServiceConfig":
        values: Dict[str, Any] = {}
        for section, keys in _SECTIONS.items():
            section_config = config.get(section) or {}
            for key, field_name in keys.items():
                if key in section_config:
                    values[field_name] = section_config[key]
        return cls(**values)

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """Override fields from BODYBOX_* environment variables."""
        environ = os.environ if environ is None else environ
        types = {f.name: f.type for f in fields(self)}
        for env_name, field_name in _ENV_OVERRIDES.items():
            if env_name in environ:
                value = environ[env_name]
                setattr(self, field_name, int(value) if types[field_name] in (int, 'int') else value)
                logger.info(f"{field_name} overridden from {env_name}")
        return self

    def worker_config(self) -> Dict[str, Any]:
        return {
            'service_name': self.service_name,
            'session_id': self.session_id,
            'confidence_threshold': self.confidence_threshold,
            'line_thickness': self.line_thickness,
            'draw_labels': self.draw_labels,
            'read_timeout': self.read_timeout,
        }


def load_service_config(config_path: Optional[str] = None,
                        environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """Defaults, then the YAML file (if given), then environment overrides."""
    if config_path:
        config = ServiceConfig.from_dict(ConfigLoader(config_path).load())
    else:
        config = ServiceConfig()
    return config.apply_env(environ)
