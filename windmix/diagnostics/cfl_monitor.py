import numpy as np

from windmix import logger
from windmix.diagnostics.base import LESDiagnostic
from windmix.timestepping import cfl_number


class CFLMonitor(LESDiagnostic):
    """Logs the largest CFL number of the flow and aborts the run when it is NaN.

    The CFL number is evaluated for ``vs.dt``, the step chosen by the time step
    wizard. Steps that are shortened to land on an output time have a smaller
    CFL number than the one reported. No file output.
    """

    name = "cfl_monitor"  #:
    output_frequency = None  #: Seconds of model time between checks

    def initialize(self, state):
        pass

    def diagnose(self, state):
        pass

    def output(self, state):
        vs = state.variables
        cfl = cfl_number(state, float(vs.dt))

        if np.isnan(cfl):
            raise RuntimeError(f"CFL number is NaN at iteration {int(vs.itt)}")

        logger.diagnostic(" Maximal CFL number = {:.4f} (for wizard time step {:.2f}s)", cfl, float(vs.dt))
