"""Small shared helpers."""

import functools
import logging
import time

logger = logging.getLogger(__name__)


def profile_time(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start_time
        logger.info("[PROFILE] Function '%s' executed in %.3f seconds", func.__qualname__, elapsed)
        return result

    return wrapper
