from __future__ import annotations

import logging
from typing import Callable, Optional

from .logs import get_logger
from .model import RepeatStatus

SEPARATOR = "=" * 22


def hello_tasklet(message: str, logger: Optional[logging.Logger] = None) -> Callable[[], RepeatStatus]:
    """
    Build an action that logs `message` between two separator lines and finishes.

    Always returns FINISHED; there is nothing in it that can fail.
    """
    log = logger or get_logger(__name__)

    def tasklet() -> RepeatStatus:
        log.info(SEPARATOR)
        log.info(" >> %s", message)
        log.info(SEPARATOR)
        return RepeatStatus.FINISHED

    tasklet.__name__ = f"hello_tasklet[{message}]"
    return tasklet
