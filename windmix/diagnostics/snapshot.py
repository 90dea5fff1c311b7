import copy

from windmix.diagnostics.base import LESDiagnostic

SNAPSHOT_VARIABLES = ("u", "v", "w", "temp", "salt", "nu_e")


class Snapshot(LESDiagnostic):
    """Instantaneous velocity, tracer and eddy viscosity fields."""

    name = "snapshot"  #:
    output_path = "{identifier}.snapshot.nc"
    output_frequency = None  #: Seconds of model time between snapshots

    def __init__(self, state):
        self.output_variables = list(SNAPSHOT_VARIABLES)

    def initialize(self, state):
        # snapshot data lives in the model state, only metadata is copied
        self.var_meta = {key: copy.copy(state.var_meta[key]) for key in self.output_variables}
        self.variables = state.variables
        self.initialize_output(state)

    def diagnose(self, state):
        pass

    def output(self, state):
        self.write_record(state, "snapshot")
