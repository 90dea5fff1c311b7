import sys
import warnings

LOGLEVELS = ("trace", "debug", "info", "warning", "error")

#: Severity of the custom level used for physical diagnostics (between ERROR and CRITICAL)
DIAGNOSTIC_LEVEL = 45

LEVEL_COLORS = {
    "TRACE": "<dim>",
    "DEBUG": "<dim><cyan>",
    "INFO": "",
    "SUCCESS": "<dim><green>",
    "WARNING": "<yellow>",
    "ERROR": "<bold><red>",
    "DIAGNOSTIC": "<bold><yellow>",
    "CRITICAL": "<bold><red><WHITE>",
}


def _register_diagnostic_level(logger):
    try:
        logger.level("DIAGNOSTIC")
    except ValueError:
        logger.level("DIAGNOSTIC", no=DIAGNOSTIC_LEVEL)

    def diagnostic(self, message, *args, **kwargs):
        self.opt(depth=1).log("DIAGNOSTIC", message, *args, **kwargs)

    type(logger).diagnostic = diagnostic


def _warnings_to_logger(logger):
    def showwarning(message, category, filename, lineno, file=None, line=None):
        logger.opt(depth=2).warning(f"{category.__name__}: {message} ({filename}:{lineno})")

    warnings.showwarning = showwarning


def setup_logging(loglevel="info", stream_sink=None):
    """(Re-)configures the loguru logger used throughout windmix.

    Messages go to ``stream_sink`` (standard output by default) without
    decoration, coloured by level when writing to a terminal.
    """
    from loguru import logger

    if stream_sink is None:
        stream_sink = sys.stdout

    _register_diagnostic_level(logger)

    for level, color in LEVEL_COLORS.items():
        logger.level(level, color=color)

    _warnings_to_logger(logger)

    logger.configure(
        handlers=[
            dict(
                sink=stream_sink,
                level=loglevel.upper(),
                format="<level>{message}</level>",
                colorize=getattr(stream_sink, "isatty", lambda: False)(),
            )
        ]
    )
    logger.enable("windmix")
    return logger
