"""
Logging setup for scripts that use primes_web.

The library itself only creates module loggers; applications call
setup_logging() once.
"""

import logging
from pathlib import Path
from typing import Optional, Union


def setup_logging(level: Union[str, int] = 'INFO', log_file: Optional[Union[str, Path]] = None):
    """Set up logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )
