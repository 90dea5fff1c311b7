#!/usr/bin/env python

import numpy as np

from windmix import LESSetup, logger
from windmix import forcing, initial_conditions

__WINDMIX_VERSION__ = "0.1.0"


class WindMixingSetup(LESSetup):
    """Wind and convection-driven mixing in the upper ocean.

    A doubly periodic box of stratified water is cooled at the surface while a
    constant wind stress acts on it. Evaporation makes the surface layer saltier.
    The turbulent boundary layer deepens over the course of the run.

    This setup demonstrates:
     - flux boundary conditions given as constants or as callables of the surface field
     - an adaptive time step driven by the CFL number
     - writing snapshots and horizontally averaged profiles

    Example:

        $ windmix run wind_mixing.py --engine my_les_package:Engine
    """

    @staticmethod
    def surface_momentum_flux(settings):
        return forcing.momentum_flux(settings.u10, settings.c_drag, settings.rho_air, settings.rho_0)

    def set_parameter(self, state):
        settings = state.settings
        settings.identifier = "wind_mixing"

        settings.nx, settings.ny, settings.nz = 32, 32, 24
        settings.Lx, settings.Ly, settings.Lz = 64.0, 64.0, 32.0

        settings.dt = 10.0
        settings.stop_time = 40 * 60.0

        settings.cfl = 1.0
        settings.max_change = 1.1
        settings.max_dt = 60.0
        settings.wizard_interval = 10

        settings.coriolis = 1e-4
        settings.alpha = 2e-4
        settings.beta = 8e-4

        settings.rho_0 = 1026.0
        settings.cp = 3991.0
        settings.heat_flux = 200.0
        settings.temp_gradient = 0.01

        settings.u10 = 10.0
        settings.c_drag = 2.5e-3
        settings.rho_air = 1.225
        settings.evaporation_rate = 1e-3 / 3600

        settings.surface_temp = 20.0
        settings.salinity = 35.0

    def set_initial_conditions(self, state):
        initial_conditions.set_initial_conditions(state, self.surface_momentum_flux(state.settings))

    def set_boundary_conditions(self, state):
        return forcing.get_boundary_conditions(state.settings)

    def set_forcing(self, state):
        forcing.set_surface_forcing(state, self.boundary_conditions)

    def set_diagnostics(self, state):
        diagnostics = state.diagnostics

        diagnostics["snapshot"].output_frequency = 60.0
        diagnostics["profiles"].output_frequency = 60.0
        diagnostics["cfl_monitor"].output_frequency = 60.0

    def after_timestep(self, state):
        vs = state.variables
        settings = state.settings

        if settings.progress_interval and int(vs.itt) % settings.progress_interval == 0:
            logger.diagnostic(
                " Iteration: {}, time: {:.1f}s, dt: {:.2f}s, max|u|: ({:.2e}, {:.2e}, {:.2e}) m/s, max(nu_e): {:.2e} m^2/s",
                int(vs.itt),
                float(vs.time),
                float(vs.dt),
                np.max(np.abs(vs.u)),
                np.max(np.abs(vs.v)),
                np.max(np.abs(vs.w)),
                np.max(vs.nu_e),
            )
