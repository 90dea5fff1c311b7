from windmix import logger, time
from windmix.diagnostics.base import LESDiagnostic  # noqa: F401
from windmix.diagnostics.cfl_monitor import CFLMonitor
from windmix.diagnostics.profiles import Profiles
from windmix.diagnostics.snapshot import Snapshot


def create_default_diagnostics(state):
    return {Diag.name: Diag(state) for Diag in (CFLMonitor, Profiles, Snapshot)}


def initialize(state):
    vs = state.variables

    for name, diagnostic in state.diagnostics.items():
        diagnostic.initialize(state)
        diagnostic.initialize_schedule(float(vs.time))

        events = (
            ("Running diagnostic", diagnostic.sampling_frequency),
            ("Writing output for diagnostic", diagnostic.output_frequency),
        )
        for event, frequency in events:
            if frequency:
                logger.info(' {} "{}" every {:.1f} {}', event, name, *time.format_time(frequency))


def diagnose(state):
    current_time = float(state.variables.time)

    for diagnostic in state.diagnostics.values():
        if diagnostic.sampling_due(current_time):
            diagnostic.diagnose(state)


def output(state):
    current_time = float(state.variables.time)

    for diagnostic in state.diagnostics.values():
        if diagnostic.output_due(current_time):
            diagnostic.output(state)

        diagnostic.advance_schedule(current_time)


def next_event_times(state):
    """Upcoming sampling and output times of all diagnostics."""
    times = []

    for diagnostic in state.diagnostics.values():
        times.extend((diagnostic.next_sampling_time, diagnostic.next_output_time))

    return [t for t in times if t is not None]
