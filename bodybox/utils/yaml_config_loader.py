import logging
import os
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads a YAML config file, searching a few likely locations."""

    def __init__(self, config_path: str):
        self.config_path = config_path

    def candidate_paths(self) -> List[str]:
        package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        return [
            self.config_path,  # Absolute path or relative to current working directory
            os.path.join(os.getcwd(), "apps", self.config_path),  # Running from project root
            os.path.join(package_dir, "..", "apps", self.config_path),  # Next to the package
            os.path.join(os.getcwd(), "..", self.config_path),  # Running from a subdirectory
        ]

    def find(self) -> Optional[str]:
        for path in self.candidate_paths():
            abs_path = os.path.abspath(path)
            if os.path.isfile(abs_path):
                return abs_path
        return None

    def load(self) -> Dict[str, Any]:
        config_file = self.find()
        if not config_file:
            logger.error(f"Configuration file '{self.config_path}' not found!")
            for i, path in enumerate(self.candidate_paths(), 1):
                logger.error(f"  {i}. {os.path.abspath(path)}")
            raise FileNotFoundError(
                f"Configuration file '{self.config_path}' not found. "
                f"Tried {len(self.candidate_paths())} paths.")

        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration in {config_file} must be a mapping")

        logger.info(f"Successfully loaded configuration from: {config_file}")
        return config
