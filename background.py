from __future__ import annotations

import asyncio
import logging
import threading

logger = logging.getLogger(__name__)


def run_in_thread(func, *args, name=None) -> asyncio.Future:
    """Run ``func(*args)`` on a daemon thread and resolve a future on the running loop.

    The thread is never joined: if the loop is gone by the time ``func``
    returns, the result is dropped and the thread just ends.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def resolve(result=None, error=None):
        if future.cancelled():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def worker():
        try:
            result = func(*args)
        except Exception as exc:
            callback = (resolve, None, exc)
        else:
            callback = (resolve, result, None)
        try:
            loop.call_soon_threadsafe(*callback)
        except RuntimeError:
            logger.debug("loop closed before %s finished, result dropped", name or func)

    threading.Thread(target=worker, name=name, daemon=True).start()
    return future
