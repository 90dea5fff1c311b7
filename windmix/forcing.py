"""Surface fluxes and boundary conditions of the wind mixing scenario.

Fluxes follow the convention that a positive value transports a quantity
upward, i.e. out of the ocean at the surface.
"""

from collections import namedtuple

import numpy as np

FluxBoundaryCondition = namedtuple("FluxBoundaryCondition", ("value", "parameters"))
FluxBoundaryCondition.__new__.__defaults__ = (None,)
GradientBoundaryCondition = namedtuple("GradientBoundaryCondition", ("value", "parameters"))
GradientBoundaryCondition.__new__.__defaults__ = (None,)
FieldBoundaryConditions = namedtuple("FieldBoundaryConditions", ("top", "bottom"))
FieldBoundaryConditions.__new__.__defaults__ = (None, None)


def momentum_flux(u10, c_drag, rho_air, rho_0):
    """Kinematic momentum flux exerted by a wind of speed ``u10``.

    Negative for a positive wind speed, i.e. momentum enters the ocean.
    """
    return -rho_air / rho_0 * c_drag * u10 * abs(u10)


def temperature_flux(heat_flux, rho_0, cp):
    """Converts a heat flux in W/m^2 to a temperature flux in m K/s."""
    return heat_flux / (rho_0 * cp)


def salinity_flux(x, y, t, salt, evaporation_rate):
    # evaporation removes fresh water, so salinity enters through the surface
    return -evaporation_rate * salt


def get_boundary_conditions(settings):
    """Boundary conditions of all prognostic fields that deviate from no-flux."""
    return dict(
        u=FieldBoundaryConditions(
            top=FluxBoundaryCondition(
                momentum_flux(settings.u10, settings.c_drag, settings.rho_air, settings.rho_0)
            )
        ),
        temp=FieldBoundaryConditions(
            top=FluxBoundaryCondition(temperature_flux(settings.heat_flux, settings.rho_0, settings.cp)),
            bottom=GradientBoundaryCondition(settings.temp_gradient),
        ),
        salt=FieldBoundaryConditions(
            top=FluxBoundaryCondition(salinity_flux, parameters=settings.evaporation_rate),
        ),
    )


def evaluate_boundary_condition(bc, state, field=None):
    """Evaluates a boundary condition on the horizontal T grid.

    Callable values are called as ``value(x, y, t, field_at_boundary[, parameters])``,
    where the field is taken at the surface for flux conditions.
    """
    vs = state.variables
    shape = (vs.xt.size, vs.yt.size)
    value = bc.value

    if callable(value):
        args = [
            vs.xt[:, np.newaxis],
            vs.yt[np.newaxis, :],
            float(vs.time),
            None if field is None else field[:, :, -1],
        ]
        if bc.parameters is not None:
            args.append(bc.parameters)
        value = value(*args)

    return np.broadcast_to(value, shape).copy()


FORCING_VARIABLES = (
    ("surface_taux", "u"),
    ("surface_tauy", "v"),
    ("forc_temp_surface", "temp"),
    ("forc_salt_surface", "salt"),
)


def set_surface_forcing(state, boundary_conditions):
    """Evaluates all boundary conditions into the forcing variables of the state."""
    vs = state.variables

    for var, field in FORCING_VARIABLES:
        bcs = boundary_conditions.get(field)
        if bcs is not None and isinstance(bcs.top, FluxBoundaryCondition):
            forcing = evaluate_boundary_condition(bcs.top, state, getattr(vs, field))
        else:
            forcing = np.zeros((vs.xt.size, vs.yt.size))
        setattr(vs, var, forcing)

    temp_bcs = boundary_conditions.get("temp")
    if temp_bcs is not None and isinstance(temp_bcs.bottom, GradientBoundaryCondition):
        vs.temp_grad_bottom = evaluate_boundary_condition(temp_bcs.bottom, state)
    else:
        vs.temp_grad_bottom = np.zeros((vs.xt.size, vs.yt.size))
