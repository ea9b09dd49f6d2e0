# scheduler.py

import itertools


class FrameScheduler:
    """
    A "run on next display refresh" primitive.

    The host loop calls run_pending() once per refresh. Callbacks requested while
    the pending batch is firing are kept for the following refresh, so a render loop
    that re-arms itself runs exactly once per refresh.
    """

    def __init__(self):
        self._handles = itertools.count(1)
        self._pending = {}  # handle -> callback, in request order
        self._firing = {}  # the batch run_pending() is working through

    @property
    def pending(self):
        return len(self._pending)

    def request(self, callback):
        """Queues callback for the next refresh and returns a handle for cancel()."""
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle):
        """
        Drops a pending callback, including one still waiting in the batch that is
        firing right now. Unknown or already fired handles are ignored.
        """
        self._pending.pop(handle, None)
        self._firing.pop(handle, None)

    def run_pending(self):
        """
        Fires every callback that was pending when the call started and was not
        cancelled before its turn.

        Returns:
            int: The number of callbacks fired.
        """
        self._firing, self._pending = self._pending, {}
        fired = 0
        try:
            while self._firing:
                handle = next(iter(self._firing))
                callback = self._firing.pop(handle)
                callback()
                fired += 1
        finally:
            self._firing = {}
        return fired
