"""Human-readable model times for log messages.

Runs last minutes to hours, so these are the only units reported.
"""

#: Reporting units, largest first, with their length in seconds
UNITS = (
    ("hours", 3600.0),
    ("minutes", 60.0),
    ("seconds", 1.0),
)

SECONDS_PER = dict(UNITS)


def in_unit(seconds, unit):
    return seconds / SECONDS_PER[unit]


def format_time(seconds):
    """Expresses ``seconds`` in the largest unit that yields a value of at least one.

    Returns a ``(value, unit)`` tuple, e.g. ``(40.0, "minutes")`` for 2400 s.
    """
    for unit, length in UNITS:
        if abs(seconds) >= length:
            return seconds / length, unit

    return float(seconds), "seconds"
