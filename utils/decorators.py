from __future__ import annotations

import logging
from functools import wraps

logger = logging.getLogger(__name__)


def unit_of_work(fn):
    """
    Run a service method as a single transaction.

    The method commits through its own storage when it succeeds. If it raises
    anything, pending changes are rolled back and the error propagates
    unchanged.
    """
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except Exception:
            logger.debug("Rolling back %s", fn.__qualname__)
            self.storage.rollback()
            raise

    return wrapper
