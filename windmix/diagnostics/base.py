import abc
import os

from windmix import logger, time, runtime_settings
from windmix.io_tools import netcdf as nctools
from windmix.signals import do_not_disturb
from windmix.state import LESVariables
from windmix.timestepping import TIME_EPS


def _is_due(next_time, current_time):
    return next_time is not None and current_time >= next_time - TIME_EPS


def _next_after(next_time, frequency, current_time):
    # skip every event time that has already been reached
    while next_time <= current_time + TIME_EPS:
        next_time += frequency
    return next_time


class LESDiagnostic(metaclass=abc.ABCMeta):
    """Base class for diagnostics.

    Diagnostics are sampled every ``sampling_frequency`` and write output every
    ``output_frequency`` seconds of model time; a frequency of 0 or ``None``
    disables the respective event. Since the time step is adaptive, the next
    event times are stored explicitly and the model shortens its steps to hit
    them.

    Diagnostics with an ``output_path`` write the ``output_variables`` found in
    ``var_meta`` to a NetCDF file, one record per output event.
    """

    name = None  #: Name that identifies the current diagnostic
    sampling_frequency = 0.0
    output_frequency = 0.0

    output_path = None  #: File name, may contain ``{setting}`` or ``{variable}`` placeholders
    output_variables = None

    var_meta = None  #: Metadata of internal variables
    extra_dimensions = None  #: Dimensions used in var_meta in addition to the model grid

    next_sampling_time = None
    next_output_time = None

    def __init__(self, state):
        pass

    @abc.abstractmethod
    def initialize(self, state):
        pass

    @abc.abstractmethod
    def diagnose(self, state):
        pass

    @abc.abstractmethod
    def output(self, state):
        pass

    def initialize_schedule(self, start_time):
        self.next_sampling_time = start_time if self.sampling_frequency else None
        self.next_output_time = start_time if self.output_frequency else None

    def sampling_due(self, current_time):
        return _is_due(self.next_sampling_time, current_time)

    def output_due(self, current_time):
        return _is_due(self.next_output_time, current_time)

    def advance_schedule(self, current_time):
        if self.sampling_due(current_time):
            self.next_sampling_time = _next_after(self.next_sampling_time, self.sampling_frequency, current_time)

        if self.output_due(current_time):
            self.next_output_time = _next_after(self.next_output_time, self.output_frequency, current_time)

    def initialize_variables(self, state):
        if self.var_meta is None:
            self.variables = None
            return

        self.variables = LESVariables(self.var_meta, dict(state.dimensions, **(self.extra_dimensions or {})))

    def get_output_file_name(self, state):
        placeholders = dict(state.variables.items(), **dict(state.settings.items()))
        return self.output_path.format(**placeholders)

    def _writes_files(self):
        return bool(
            self.output_frequency
            and self.output_path
            and self.output_variables
            and not runtime_settings.diskless_mode
        )

    @do_not_disturb
    def initialize_output(self, state):
        """Creates the output file and writes all time-independent variables to it."""
        if not self._writes_files():
            return

        path = self.get_output_file_name(state)
        if os.path.isfile(path) and not runtime_settings.force_overwrite:
            raise IOError(
                f'output file {path} for diagnostic "{self.name}" exists '
                "(change output path or enable force_overwrite runtime setting)"
            )

        with nctools.open_file(path, "w") as ncfile:
            nctools.initialize_file(state, ncfile, extra_dimensions=self.extra_dimensions)

            for key in self.output_variables:
                var = self.var_meta[key]
                if key not in ncfile.variables:
                    nctools.initialize_variable(state, key, var, ncfile)
                if not var.time_dependent:
                    nctools.write_variable(state, key, var, self.variables.get(key), ncfile)

    @do_not_disturb
    def write_output(self, state):
        """Appends one record of all time-dependent variables."""
        if runtime_settings.diskless_mode:
            return

        with nctools.open_file(self.get_output_file_name(state), "r+") as ncfile:
            record = nctools.advance_time(float(state.variables.time), ncfile)

            for key in self.output_variables:
                var = self.var_meta[key]
                if var.time_dependent:
                    nctools.write_variable(state, key, var, self.variables.get(key), ncfile, time_step=record)

    def write_record(self, state, description):
        """Logs and writes one output record, creating the file first if it is missing."""
        model_time, unit = time.format_time(float(state.variables.time))
        logger.info(" Writing {} at {:.2f} {}", description, model_time, unit)

        if not os.path.isfile(self.get_output_file_name(state)):
            self.initialize_output(state)

        self.write_output(state)
