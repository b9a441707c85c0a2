# Licensed under the Apache License, Version 2.0
import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "DIRMETA_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level_name: Optional[str] = None) -> None:
    """
    Configure the root logger for applications embedding dirmeta.

    The library itself never calls this; `level_name` overrides $DIRMETA_LOG_LEVEL.
    """
    level_name = (level_name or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
