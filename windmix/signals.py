import signal
import contextlib
import functools

from windmix import logger

INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install(handler, signals):
    """Installs ``handler`` for all ``signals`` and returns the handlers it replaced."""
    previous = {}
    for signum in signals:
        previous[signum] = signal.getsignal(signum)
        signal.signal(signum, handler)
    return previous


def _restore(previous):
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def _call_handler(handler, signum, frame):
    if callable(handler):
        handler(signum, frame)
    elif handler == signal.SIG_DFL:
        # handler is already restored, so re-raising triggers the default action
        signal.raise_signal(signum)


class _DeferredSignal:
    def __init__(self, previous):
        self.previous = previous
        self.pending = None

    def __call__(self, signum, frame):
        if self.pending is not None:
            # second interrupt: give up on finishing the write
            _restore(self.previous)
            _call_handler(self.previous[signum], signum, frame)
            return

        self.pending = (signum, frame)
        logger.error("Signal {} received, finishing output before exit", signum)


def do_not_disturb(function):
    """Decorator that defers SIGINT and SIGTERM until the decorated function returns.

    The handler that was active before is called afterwards with the deferred
    signal, so output files are never left half-written.
    """

    @functools.wraps(function)
    def wrapper(*args, **kwargs):
        deferred = _DeferredSignal({})
        deferred.previous = _install(deferred, INTERRUPT_SIGNALS)

        try:
            return function(*args, **kwargs)
        finally:
            _restore(deferred.previous)
            if deferred.pending is not None:
                signum, frame = deferred.pending
                _call_handler(deferred.previous[signum], signum, frame)

    return wrapper


@contextlib.contextmanager
def signals_to_exception(signals=INTERRUPT_SIGNALS):
    """Turns interrupt signals into ``SystemExit`` while the block runs.

    This lets the run loop close its output and report timings when killed.
    """

    def abort(signum, frame):
        logger.critical("Received interrupt signal {}", signum)
        raise SystemExit("Aborted")

    previous = _install(abort, signals)
    try:
        yield
    finally:
        _restore(previous)
