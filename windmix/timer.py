import threading
from time import perf_counter

#: Timers only accumulate while ``timer_context.active`` is true (per thread)
timer_context = threading.local()


class Timer:
    """Accumulates wall time spent inside ``with timer:`` blocks."""

    def __init__(self):
        self.calls = 0
        self.total_time = 0.0
        self.last_time = 0.0
        self._entered_at = None

    def __enter__(self):
        self._entered_at = perf_counter()
        return self

    def __exit__(self, *exc_info):
        self.last_time = perf_counter() - self._entered_at

        if not getattr(timer_context, "active", True):
            return

        self.calls += 1
        self.total_time += self.last_time
