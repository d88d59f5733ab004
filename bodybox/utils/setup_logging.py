import logging
from typing import Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """Configure root logging for a bodybox process."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logging.getLogger(__name__).debug(f"Logging configured at level {logging.getLevelName(level)}")
