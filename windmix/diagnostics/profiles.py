import numpy as np

from windmix.diagnostics.base import LESDiagnostic
from windmix.operators import Axis, axis_difference, horizontal_mean
from windmix.variables import Variable, ZT, ZW

ZI = ("zi",)
MEAN_FIELDS = ("temp", "salt", "u", "v", "w")

PROFILE_VARIABLES = {
    "zi": Variable(
        "Vertical coordinate (interior W)",
        ZI,
        "m",
        "Vertical coordinate of interior cell faces",
        time_dependent=False,
        extra_attributes={"axis": "Z", "positive": "up"},
    ),
    "temp_mean": Variable("Mean temperature", ZT, "deg C", "Horizontally averaged temperature"),
    "salt_mean": Variable("Mean salinity", ZT, "psu", "Horizontally averaged salinity"),
    "u_mean": Variable("Mean zonal velocity", ZT, "m/s", "Horizontally averaged zonal velocity"),
    "v_mean": Variable("Mean meridional velocity", ZT, "m/s", "Horizontally averaged meridional velocity"),
    "w_mean": Variable("Mean vertical velocity", ZW, "m/s", "Horizontally averaged vertical velocity"),
    "dtemp_dz": Variable(
        "Mean temperature gradient", ZI, "K/m", "Horizontally averaged vertical temperature gradient"
    ),
}


def temperature_gradient(temp, zt):
    """Vertical temperature gradient on interior cell faces, averaged horizontally."""
    dz = np.diff(zt)
    return horizontal_mean(axis_difference(temp, Axis.z), Axis.z) / dz


class Profiles(LESDiagnostic):
    """Horizontally averaged vertical profiles of the velocity and tracer fields."""

    output_path = "{identifier}.profiles.nc"
    name = "profiles"  #:
    output_frequency = None  #: Frequency (in seconds) in which output is written.
    sampling_frequency = None  #: Frequency (in seconds) in which profiles are computed.

    def __init__(self, state):
        self.var_meta = dict(PROFILE_VARIABLES)
        self.output_variables = list(PROFILE_VARIABLES.keys())
        self.extra_dimensions = {"zi": state.settings.nz - 1}

    def initialize(self, state):
        self.initialize_variables(state)
        self.variables.zi = state.variables.zw[1:-1]
        self.initialize_output(state)

    def diagnose(self, state):
        vs = state.variables

        for field in MEAN_FIELDS:
            setattr(self.variables, f"{field}_mean", horizontal_mean(getattr(vs, field), Axis.z))

        self.variables.dtemp_dz = temperature_gradient(vs.temp, vs.zt)

    def output(self, state):
        # profiles are only computed here when sampling is off
        if not self.sampling_frequency:
            self.diagnose(state)

        self.write_record(state, "mean profiles")
